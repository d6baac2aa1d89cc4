# Utils package initialization file
from utils.crypto import decrypt_string
from utils.signatures import is_valid_alchemy_signature, is_valid_cloudflare_signature

__all__ = ['decrypt_string', 'is_valid_alchemy_signature', 'is_valid_cloudflare_signature']
