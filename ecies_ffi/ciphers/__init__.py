from .aead import AeadCipher, AESCipher, ChaChaCipher

__all__ = ["AeadCipher", "AESCipher", "ChaChaCipher"]
