"""DRBG test double replaying fixed output.

Each ``generate`` call returns the next scripted chunk, so bounded draws and
shuffles can be checked against values worked out by hand.
"""


class ScriptedDRBG:
    """Stands in for HashDRBG, returning one hex chunk per request."""

    def __init__(self, *chunks: str) -> None:
        self._chunks = [bytes.fromhex(chunk) for chunk in chunks]
        self.requests: list[int] = []

    @property
    def remaining(self) -> int:
        return len(self._chunks)

    def generate(self, num_bytes: int) -> bytes:
        self.requests.append(num_bytes)
        chunk = self._chunks.pop(0)
        if len(chunk) != num_bytes:
            raise AssertionError(f"scripted {len(chunk)} bytes, {num_bytes} requested")
        return chunk
