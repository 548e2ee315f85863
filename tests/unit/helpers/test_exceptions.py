"""Unit tests for helpers/exceptions.py."""

import pytest

from reelrules.helpers.exceptions import RegistryConfigError, UnknownEntityKindError


class TestUnknownEntityKindError:
    @pytest.mark.unit
    def test_carries_kind(self) -> None:
        err = UnknownEntityKindError("radio")
        assert err.kind == "radio"
        assert "radio" in str(err)

    @pytest.mark.unit
    def test_is_lookup_error(self) -> None:
        """Callers catching LookupError also catch unknown kinds."""
        with pytest.raises(LookupError):
            raise UnknownEntityKindError("radio")


class TestRegistryConfigError:
    @pytest.mark.unit
    def test_message_preserved(self) -> None:
        err = RegistryConfigError("[channel.hd] no legal operators")
        assert str(err) == "[channel.hd] no legal operators"
