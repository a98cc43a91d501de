"""Unit tests for the threshold BLS combiner."""

import pytest
from py_ecc.optimized_bls12_381 import curve_order

from tests.helpers.synthetic_election import SUBMISSION_ID, SyntheticElection
from vvote_verifier.domain.errors.bls import (
    BLSSignatureError,
    InsufficientSharesError,
    InvalidShareError,
)
from vvote_verifier.domain.errors.configuration import ConfigurationError
from vvote_verifier.domain.primitives.bls_threshold import (
    G1_ENCODED_SIZE,
    ThresholdCombiner,
    lagrange_weights,
    verify_signature,
)


class TestLagrangeWeights:
    """Tests for Lagrange weights at zero."""

    def test_weights_sum_to_one(self) -> None:
        """Test that interpolating the constant polynomial 1 gives 1."""
        weights = lagrange_weights([0, 1, 2, 3])

        assert sum(weights.values()) % curve_order == 1

    def test_weights_recover_polynomial_at_zero(self) -> None:
        """Test interpolation of f(x) = 7 + 3x + 2x^2 at x = 0."""
        def f(x: int) -> int:
            return 7 + 3 * x + 2 * x * x

        indices = [0, 2, 4]
        weights = lagrange_weights(indices)

        value = sum(weights[i] * f(i + 1) for i in indices) % curve_order
        assert value == 7


class TestThresholdCombiner:
    """Tests for ThresholdCombiner."""

    def test_threshold_above_nodes_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            ThresholdCombiner(number_of_nodes=3, threshold=4)

    def test_zero_nodes_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            ThresholdCombiner(number_of_nodes=0, threshold=0)

    def test_combines_any_four_of_five(self, election: SyntheticElection) -> None:
        """Test that different 4-subsets give the same signature."""
        for subset in ([0, 1, 2, 3], [1, 2, 3, 4], [0, 2, 3, 4]):
            combiner = ThresholdCombiner(number_of_nodes=5, threshold=4)
            for index in subset:
                combiner.add_share(election.partial_signatures[index], index)

            combined = combiner.combine()

            assert len(combined) == G1_ENCODED_SIZE
            assert combined == election.combined_signature

    def test_all_five_shares_combine(self, election: SyntheticElection) -> None:
        combiner = ThresholdCombiner()
        for index, share in election.partial_signatures.items():
            combiner.add_share(share, index)

        assert combiner.combine() == election.combined_signature

    def test_three_of_five_is_insufficient(self, election: SyntheticElection) -> None:
        """Test the 4-of-5 combiner with only three usable shares."""
        combiner = ThresholdCombiner(number_of_nodes=5, threshold=4)
        for index in (0, 1, 2):
            combiner.add_share(election.partial_signatures[index], index)

        with pytest.raises(InsufficientSharesError) as exc_info:
            combiner.combine()

        assert exc_info.value.available == 3
        assert exc_info.value.threshold == 4
        assert isinstance(exc_info.value, BLSSignatureError)

    def test_duplicate_index_rejected(self, election: SyntheticElection) -> None:
        combiner = ThresholdCombiner()
        combiner.add_share(election.partial_signatures[0], 0)

        with pytest.raises(InvalidShareError, match="duplicate"):
            combiner.add_share(election.partial_signatures[1], 0)

    @pytest.mark.parametrize("index", [-1, 5])
    def test_index_out_of_range_rejected(
        self, election: SyntheticElection, index: int
    ) -> None:
        combiner = ThresholdCombiner(number_of_nodes=5, threshold=4)

        with pytest.raises(InvalidShareError) as exc_info:
            combiner.add_share(election.partial_signatures[0], index)

        assert exc_info.value.index == index

    def test_malformed_share_rejected(self) -> None:
        combiner = ThresholdCombiner()

        with pytest.raises(InvalidShareError):
            combiner.add_share(b"\x00" * 10, 0)


@pytest.mark.slow
class TestVerifySignature:
    """Tests for the pairing check."""

    def test_combined_signature_verifies(self, election: SyntheticElection) -> None:
        assert verify_signature(
            SUBMISSION_ID.encode("utf-8"),
            election.combined_signature,
            election.bls_public_key,
        )

    def test_wrong_message_fails(self, election: SyntheticElection) -> None:
        assert not verify_signature(
            b"another submission",
            election.combined_signature,
            election.bls_public_key,
        )

    def test_malformed_key_fails(self, election: SyntheticElection) -> None:
        assert not verify_signature(b"m", election.combined_signature, b"\x01" * 3)
