"""accountgate - Stateless email verification and session issuance service."""
