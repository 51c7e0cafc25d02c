import pytest

from minisearch.tokenizer import (
    STOP_WORDS,
    IdentityStemmer,
    Normalizer,
    PorterStemmer,
    Stemmer,
    get_stemmer,
    normalize,
)


class DropPluralStemmer(Stemmer):
    name = "plural"

    def stem(self, token):
        return token.rstrip("s")


def test_basic_query_is_lowercased_and_split():
    assert normalize("Pharaoh ancient Egypt") == ["pharaoh", "ancient", "egypt"]


def test_punctuation_numbers_and_short_tokens():
    text = "The 18th Dynasty, queen's name? Ankhesenamun!"
    assert normalize(text) == ["18th", "dynasty", "queen", "name", "ankhesenamun"]


def test_only_filtered_tokens_gives_empty():
    assert normalize("123 456 a b 789") == []
    assert normalize("123 the a") == []


@pytest.mark.parametrize("text", [None, "", "   ", "\n\t"])
def test_blank_input(text):
    assert normalize(text) == []


def test_stop_words_removed():
    assert normalize("cats and dogs in the house") == ["cats", "dogs", "house"]
    assert {"the", "a", "in", "and", "or", "by", "to", "for", "from", "into", "that"} <= STOP_WORDS


def test_duplicates_are_preserved_in_order():
    assert normalize("dog cat dog") == ["dog", "cat", "dog"]


def test_result_is_restartable():
    normalizer = Normalizer()
    first = normalizer.normalize("alpha beta")
    assert list(first) == list(first) == normalizer.normalize("alpha beta")


def test_identity_stemmer_is_default():
    assert isinstance(Normalizer().stemmer, IdentityStemmer)
    assert IdentityStemmer().stem("running") == "running"


def test_porter_stemmer():
    normalizer = Normalizer(stemmer=PorterStemmer())
    assert normalizer.normalize("running cats") == ["run", "cat"]


def test_empty_stem_drops_token():
    normalizer = Normalizer(stemmer=DropPluralStemmer())
    assert normalizer.normalize("cats ss dogs") == ["cat", "dog"]


def test_custom_stop_words_and_min_length():
    normalizer = Normalizer(stop_words={"cat"}, min_length=3)
    assert normalizer.normalize("the cat ox dog") == ["the", "dog"]


def test_invalid_min_length():
    with pytest.raises(ValueError):
        Normalizer(min_length=0)


def test_get_stemmer():
    assert isinstance(get_stemmer("porter"), PorterStemmer)
    assert isinstance(get_stemmer("none"), IdentityStemmer)
    assert isinstance(get_stemmer("Identity"), IdentityStemmer)
    with pytest.raises(ValueError):
        get_stemmer("snowball")
