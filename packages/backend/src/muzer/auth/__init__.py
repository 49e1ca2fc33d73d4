"""Authentication.

Sessions are established by an external auth provider and arrive as a
signed session token (cookie or Bearer header). The session guard turns
that into an Identity; app tokens are derived from it on demand.
"""
