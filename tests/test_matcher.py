from kewpa_search.core.search.matcher import DEFAULT_WEIGHTS, ScoringWeights, match


def test_substring_match_scores_100_and_highlights_query():
    m = match("Dell Laptop", "dell")
    assert m.score == 100
    assert m.highlights == ("dell",)


def test_substring_is_case_insensitive_and_keeps_raw_query():
    m = match("dell laptop", "LAPTOP")
    assert m.score == 100
    assert m.highlights == ("LAPTOP",)


def test_subsequence_rewards_earlier_query_chars():
    # d -> (2-0)*2 = 4, l -> (2-1)*2 = 2
    m = match("Dell Laptop", "dl")
    assert m.score == 6
    assert m.highlights == ()


def test_subsequence_with_repeated_query_chars():
    # l, l, a: 3*2 + 2*2 + 1*2
    assert match("Dell Laptop", "lla").score == 12


def test_repeated_char_not_present_twice_fails():
    assert match("Dell Laptop", "ddl").score == 0


def test_failed_subsequence_is_all_or_nothing():
    # "d", "e" match but "z" never does
    m = match("Dell Laptop", "dez")
    assert m.score == 0
    assert m.highlights == ()


def test_empty_field_text():
    assert match("", "dell").score == 0
    assert match(None, "dell").score == 0


def test_query_longer_than_field():
    assert match("ICT", "ICT-2024").score == 0


def test_empty_query_is_no_match():
    assert match("Dell Laptop", "").score == 0


def test_word_prefix_is_already_a_substring_hit():
    # A word starting with the query always contains it, so rule 1 wins and
    # the +50 bonus never stacks on top of it.
    m = match("Stor Utama", "uta")
    assert m.score == DEFAULT_WEIGHTS.substring_score
    assert m.highlights == ("uta",)


def test_zero_subsequence_weight_disables_fuzzy_hits():
    weights = ScoringWeights(subsequence_weight=0)
    assert match("Dell Laptop", "dl", weights).score == 0
    assert match("Dell Laptop", "dell", weights).score == 100


def test_long_fuzzy_query_never_outranks_substring():
    text = "a-b-c-d-e-f-g-h-i-j-k"
    fuzzy = match(text, "abcdefghij")
    substring = match(text, "a-b")
    assert 0 < fuzzy.score < substring.score
    assert fuzzy.score == 99


def test_substring_dominance_over_any_fuzzy_query():
    text = "Syarikat Delima Sdn Bhd"
    assert match(text, "delima").score >= match(text, "sdlmsdn").score
    assert match(text, "sdlmsdn").score > 0


def test_custom_weights():
    weights = ScoringWeights(substring_score=500, subsequence_weight=10, word_prefix_bonus=0)
    assert match("Dell Laptop", "dell", weights).score == 500
    assert match("Dell Laptop", "dl", weights).score == 30


def test_weights_from_config_fall_back_to_defaults():
    weights = ScoringWeights.from_config({"word_prefix_bonus": 10})
    assert weights.substring_score == 100
    assert weights.subsequence_weight == 2
    assert weights.word_prefix_bonus == 10
    assert ScoringWeights.from_config(None) == DEFAULT_WEIGHTS
