"""
Domain layer - pure verification logic for vVote ballot generation.

This layer contains:
- Value objects for the published commitment data (models/)
- Cryptographic primitives: hash commitments, EC ElGamal, Hash_DRBG,
  BLS threshold combination (primitives/)
- Stateless verification services (services/)
- Domain exceptions (errors/)

This layer must NOT import from application, infrastructure, or config.
"""

from vvote_verifier.domain.exceptions import VerifierError

__all__: list[str] = ["VerifierError"]
