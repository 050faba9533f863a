import base64
import hashlib

import bcrypt


def password_digest(password: str) -> bytes:
    """
    bcrypt принимает не больше 72 байт, поэтому хешируется base64(sha256(пароль)):
    44 байта для пароля любой длины и кодировки.
    """
    return base64.b64encode(hashlib.sha256(password.encode('utf-8')).digest())


def get_password_hash(password: str) -> str:
    """
    Хеширует пароль для хранения в базе, используя bcrypt.
    """
    salt = bcrypt.gensalt()
    hashed_password = bcrypt.hashpw(password_digest(password), salt)
    return hashed_password.decode('utf-8')
