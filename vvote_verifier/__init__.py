"""
vVote Ballot Generation Audit Verifier

An independent auditor for the PoD printer ballot generation protocol.
From the publicly posted commitment data it re-derives:
- the randomness each mix server contributed to every audited ballot
- the re-encrypted, sorted candidate ciphers and their permutation
- the Fiat-Shamir audit selection and the threshold signature seeding it

Every check is recomputed from public data; nothing is trusted.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
