from .jwt_token_issuer import JwtTokenIssuer

__all__ = ["JwtTokenIssuer"]
