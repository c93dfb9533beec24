"""
Identity: usuarios, Credential Codec (JWT), Password Hasher (Argon2),
Authentication Service y Gate.

Nota: no re-exporta gate.py (depende del container y de FastAPI).
"""
