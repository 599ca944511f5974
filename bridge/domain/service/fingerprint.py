"""Invite link fingerprinting."""

import hashlib

from bridge.domain.value import LinkFingerprint


def fingerprint_invite_link(invite_link: str | None) -> LinkFingerprint:
    """Compute the lookup key for an invite link.

    The SHA-256 hex digest is used rather than the link itself so the index
    key has a fixed length and does not expose the credential. Missing input
    hashes as the empty string.

    Args:
        invite_link: Invite link as issued or as reported by Telegram

    Returns:
        64 character lowercase hex fingerprint
    """
    digest = hashlib.sha256((invite_link or "").encode("utf-8")).hexdigest()
    return LinkFingerprint(digest)
