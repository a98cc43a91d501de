"""Cryptographic primitives used by the ballot generation verifier.

- hash_commitment: SHA-256 witness/message commitments
- elgamal: EC ElGamal over P-256
- hash_drbg / drbg_shuffle: deterministic audit selection randomness
- bls_threshold: BLS12-381 threshold signature combination
- serial_numbers: canonical serial number ordering
"""
