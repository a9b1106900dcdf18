import base64
import binascii
import json
import re
from enum import Enum
from typing import Optional

TEXTURES_HOST = "textures.minecraft.net"
TEXTURES_BASE_URL = "https://textures.minecraft.net/texture/"

# Kept as literal text so the encoded value stays byte-identical to what
# servers and head databases produce. The url is not escaped.
VALUE_PROPERTY_PREFIX = '{"textures":{"SKIN":{"url":"'
VALUE_PROPERTY_SUFFIX = '"}}}'

# Profile values shorter than this are never probed as Base64.
MIN_PROFILE_VALUE_LENGTH = 100

_USERNAME_RE = re.compile(r"[A-Za-z0-9_]{3,16}")
_BASE64_RE = re.compile(r"[A-Za-z0-9+/]*={0,2}")


class IdentifierKind(Enum):
    USERNAME = "username"
    TEXTURE_URL = "texture_url"
    PROFILE_VALUE = "profile_value"
    URL_SUFFIX = "url_suffix"


def is_username(name: str) -> bool:
    """
    Minecraft username rule: 3 to 16 ASCII letters, digits or underscores.
    https://help.minecraft.net/hc/en-us/articles/360034636712
    """
    return _USERNAME_RE.fullmatch(name) is not None


def is_base64(value: str) -> bool:
    """
    Checks that value decodes as standard Base64.
    Padding is optional, but a trailing group of a single character is not.
    """
    if _BASE64_RE.fullmatch(value) is None:
        return False

    stripped = value.rstrip("=")
    remainder = len(stripped) % 4
    if remainder == 1:
        return False
    if value != stripped and len(value) % 4 != 0:
        # Padding present but incomplete, e.g. "QQ="
        return False

    padded = stripped + "=" * ((4 - remainder) % 4)
    try:
        base64.b64decode(padded, validate=True)
    except (binascii.Error, ValueError):
        return False
    return True


def classify(identifier: str) -> IdentifierKind:
    """
    Decides which kind of skin identifier a string is.
    Checks run in order and the first match wins; anything unrecognised is
    treated as a texture hash to append to the texture host URL.
    """
    if is_username(identifier):
        return IdentifierKind.USERNAME
    if TEXTURES_HOST in identifier:
        return IdentifierKind.TEXTURE_URL
    if len(identifier) > MIN_PROFILE_VALUE_LENGTH and is_base64(identifier):
        return IdentifierKind.PROFILE_VALUE
    return IdentifierKind.URL_SUFFIX


def build_descriptor_url(suffix_or_full_url: str, is_full_url: bool) -> str:
    if is_full_url:
        return suffix_or_full_url
    return TEXTURES_BASE_URL + suffix_or_full_url


def encode_profile_value(url: str) -> str:
    """Wraps a skin url in a texture descriptor and Base64 encodes it."""
    descriptor = VALUE_PROPERTY_PREFIX + url + VALUE_PROPERTY_SUFFIX
    return base64.b64encode(descriptor.encode("utf-8")).decode("ascii")


def decode_profile_value(value: str) -> Optional[str]:
    """
    Extracts the skin url from an encoded profile value.
    Returns None if the value is not a readable texture descriptor.
    """
    try:
        decoded = base64.b64decode(value).decode("utf-8")
        descriptor = json.loads(decoded)
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return None

    if not isinstance(descriptor, dict):
        return None
    textures = descriptor.get("textures")
    if not isinstance(textures, dict):
        return None
    skin = textures.get("SKIN")
    if not isinstance(skin, dict):
        return None
    url = skin.get("url")
    return url if isinstance(url, str) else None
