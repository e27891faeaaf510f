"""
Tests for mathpix_api/alphabets.py
"""

import pytest

from mathpix_api.alphabets import Alphabet, AlphabetSet, parse_alphabet_token
from mathpix_api.base import TriState
from mathpix_api.errors import ConflictError, UnknownOptionError, UnreasonableStateError


class TestParseAlphabetToken:
    def test_allow(self):
        assert parse_alphabet_token("en") == [(Alphabet.EN, True)]

    def test_negations(self):
        assert parse_alphabet_token("!ru") == [(Alphabet.RU, False)]
        assert parse_alphabet_token("noth") == [(Alphabet.TH, False)]

    def test_all(self):
        pairs = parse_alphabet_token("all")
        assert len(pairs) == len(Alphabet)
        assert all(allowed for _, allowed in pairs)

    def test_unknown(self):
        with pytest.raises(UnknownOptionError) as exc_info:
            parse_alphabet_token("xx")
        assert exc_info.value.token == "xx"
        assert "en" in exc_info.value.known


class TestAlphabetSet:
    def test_default_is_unset(self):
        alphabets = AlphabetSet()
        assert alphabets.is_unset
        assert alphabets.to_wire() == {
            "en": None, "hi": None, "zh": None, "ja": None,
            "ko": None, "ru": None, "th": None,
        }

    def test_update(self):
        alphabets = AlphabetSet().update(["en", "!ru"])
        assert alphabets.get(Alphabet.EN) is TriState.TRUE
        assert alphabets.get("ru") is TriState.FALSE
        assert alphabets.get(Alphabet.ZH) is TriState.UNSET

    def test_update_returns_new_instance(self):
        original = AlphabetSet()
        updated = original.update(["en"])
        assert original.is_unset
        assert updated.en is TriState.TRUE

    def test_conflict_leaves_state_unchanged(self):
        alphabets = AlphabetSet().update(["hi"])
        with pytest.raises(ConflictError):
            alphabets.update(["en", "!en"])
        assert alphabets.en is TriState.UNSET
        assert alphabets.hi is TriState.TRUE

    def test_all_then_negation_in_same_call_conflicts(self):
        with pytest.raises(ConflictError):
            AlphabetSet().update(["all", "!ru"])

    def test_unknown_token_applies_nothing(self):
        alphabets = AlphabetSet()
        with pytest.raises(UnknownOptionError):
            alphabets.update(["en", "bogus"])
        assert alphabets.is_unset

    def test_all_disallowed_rejected_on_completing_call(self):
        alphabets = AlphabetSet().update(["!en", "!hi", "!zh", "!ja", "!ko", "!ru"])
        assert alphabets.th is TriState.UNSET
        with pytest.raises(UnreasonableStateError) as exc_info:
            alphabets.update(["!th"])
        assert "NoAlphabetsAllowed" in str(exc_info.value)

    def test_constructor_rejects_all_disallowed(self):
        with pytest.raises(UnreasonableStateError):
            AlphabetSet(*[TriState.FALSE] * len(Alphabet))

    def test_later_call_overrides(self):
        alphabets = AlphabetSet().update(["en"]).update(["!en", "ru"])
        assert alphabets.en is TriState.FALSE
        assert alphabets.ru is TriState.TRUE

    def test_disallow_inverts(self):
        alphabets = AlphabetSet().allow(["en"]).disallow(["ru", "th"])
        assert alphabets.to_wire()["ru"] is False
        assert alphabets.to_wire()["th"] is False
        assert alphabets.to_wire()["en"] is True

    def test_from_tokens(self):
        assert AlphabetSet.from_tokens(["en"]) == AlphabetSet(en=TriState.TRUE)

    def test_wire_order(self):
        assert list(AlphabetSet().to_wire()) == ["en", "hi", "zh", "ja", "ko", "ru", "th"]
