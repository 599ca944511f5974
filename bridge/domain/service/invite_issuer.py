"""Invite link issuer interface."""


class InviteLinkIssuer:
    """Generic interface for minting single-use channel invite links."""

    async def create_invite_link(self, channel_id: str, name: str) -> str:
        """Create an invite link usable by exactly one user.

        Args:
            channel_id: Channel the link admits to
            name: Advisory label shown to channel admins, truncated by the
                implementation to the provider's limit

        Returns:
            The invite link

        Raises:
            ProviderError: If the provider call fails or returns no link
        """
        raise NotImplementedError
