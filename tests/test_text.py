from stc_utils.text import safe_divide, tokenize


def test_tokenize_lowercases_and_strips_punctuation():
    assert tokenize("Coffee @ STARBUCKS, Inc.") == ["coffee", "starbucks", "inc"]


def test_tokenize_collapses_whitespace():
    assert tokenize("  Big\tBasket \n order ") == ["big", "basket", "order"]


def test_tokenize_keeps_digits_and_underscores():
    assert tokenize("TXN_ID 4521/07") == ["txn_id", "4521", "07"]


def test_tokenize_empty_yields_single_empty_token():
    assert tokenize("") == [""]
    assert tokenize("  --  ") == [""]
    assert tokenize(None) == [""]


def test_safe_divide_guards_zero_and_non_finite():
    assert safe_divide(3, 4) == 0.75
    assert safe_divide(1, 0) == 0.0
    assert safe_divide(1, 0, fallback=-1.0) == -1.0
    assert safe_divide(float("inf"), 1) == 0.0
    assert safe_divide(0, 5) == 0.0
