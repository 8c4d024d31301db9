"""Tests for the Clique and IBFT 2.0 genesis extraData codecs."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from ethnode.subspecs.genesis import decode_clique, decode_ibft2, encode_clique, encode_ibft2
from ethnode.subspecs.genesis.extradata import SEAL_LENGTH, VANITY_LENGTH
from ethnode.types import EncodingError
from tests.ethnode.helpers import IBFT2_EXTRA_DATA, VALIDATORS

addresses = st.lists(
    st.binary(min_size=20, max_size=20).map(lambda raw: "0x" + raw.hex()),
    min_size=1,
    max_size=10,
)


class TestClique:
    def test_layout(self) -> None:
        signer = "0x" + "11" * 20
        extra_data = encode_clique([signer])
        assert extra_data == "0x" + "00" * VANITY_LENGTH + "11" * 20 + "00" * SEAL_LENGTH

    def test_signer_order_is_preserved(self) -> None:
        a, b = "0x" + "aa" * 20, "0x" + "bb" * 20
        assert encode_clique([a, b]) != encode_clique([b, a])
        assert decode_clique(encode_clique([b, a])) == [b, a]

    def test_checksummed_signers_encode_lowercase(self) -> None:
        assert encode_clique(["0x" + "AB" * 20]) == encode_clique(["0x" + "ab" * 20])

    def test_malformed_signer_raises(self) -> None:
        with pytest.raises(EncodingError):
            encode_clique(["0x1234"])

    @pytest.mark.parametrize(
        "extra_data",
        [
            "0x00",
            "0x" + "00" * (VANITY_LENGTH + SEAL_LENGTH + 7),
            "0xzz",
        ],
    )
    def test_decode_rejects_bad_layout(self, extra_data: str) -> None:
        with pytest.raises(EncodingError):
            decode_clique(extra_data)

    @given(addresses)
    def test_decode_inverts_encode(self, signers: list[str]) -> None:
        assert decode_clique(encode_clique(signers)) == signers


class TestIBFT2:
    def test_known_vector(self) -> None:
        """Besu's reference encoding for three validators."""
        assert encode_ibft2(VALIDATORS) == IBFT2_EXTRA_DATA

    def test_decode_known_vector(self) -> None:
        assert decode_ibft2(IBFT2_EXTRA_DATA) == VALIDATORS

    def test_validator_order_is_preserved(self) -> None:
        reordered = [VALIDATORS[1], VALIDATORS[0], VALIDATORS[2]]
        assert encode_ibft2(reordered) != IBFT2_EXTRA_DATA
        assert decode_ibft2(encode_ibft2(reordered)) == reordered

    def test_malformed_validator_raises(self) -> None:
        with pytest.raises(EncodingError):
            encode_ibft2(["0xnot-an-address"])

    def test_decode_rejects_non_list(self) -> None:
        with pytest.raises(EncodingError, match="not an ibft2"):
            decode_ibft2("0x83646f67")

    def test_decode_rejects_short_validator(self) -> None:
        # [vanity, [0x1234], "", round, []]
        extra_data = "0x" + "eca0" + "00" * 32 + "c3821234" + "80" + "8400000000" + "c0"
        with pytest.raises(EncodingError, match="malformed validator"):
            decode_ibft2(extra_data)

    def test_decode_rejects_truncated_data(self) -> None:
        with pytest.raises(EncodingError):
            decode_ibft2(IBFT2_EXTRA_DATA[:-2])

    @given(addresses)
    def test_decode_inverts_encode(self, validators: list[str]) -> None:
        assert decode_ibft2(encode_ibft2(validators)) == validators
