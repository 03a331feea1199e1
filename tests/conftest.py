import pytest


@pytest.fixture
def double_run():
    """
    Returns a checker that builds a digest twice and requires identical
    section_hash values, naming the first payload key that differs.
    """
    def check(build_digest):
        digest_a = build_digest()
        digest_b = build_digest()
        if digest_a["section_hash"] == digest_b["section_hash"]:
            return

        payload_a, payload_b = digest_a["payload"], digest_b["payload"]
        differing = [
            key for key in list(payload_a) + list(payload_b)
            if payload_a.get(key, "<MISSING>") != payload_b.get(key, "<MISSING>")
        ]
        first = differing[0] if differing else None
        pytest.fail(
            f"Double-run hash mismatch in section '{digest_a['section']}': "
            f"first differing key '{first}' "
            f"({payload_a.get(first)!r} vs {payload_b.get(first)!r})"
        )

    return check
