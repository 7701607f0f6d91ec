from . import health, training_certificates, user_certificates

__all__ = ["health", "training_certificates", "user_certificates"]
