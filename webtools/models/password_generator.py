"""
Password generation in four styles plus local strength and common-password checks.

All randomness goes through a ``random.Random``-compatible source which
defaults to ``secrets.SystemRandom``; tests may pass a seeded ``random.Random``.
"""

import secrets
import string
from random import Random
from typing import Literal, Optional

from pydantic import BaseModel, Field

PasswordMode = Literal["classic", "memorable", "typable", "pronounceable"]
Strength = Literal["Weak", "Medium", "Strong"]

SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
SIMILAR_CHARS = "il1Lo0O"
SAFE_CHARSET = "abcdefghjkmnpqrstuvwxyzABCDEFGHJKLMNPQRSTUVWXYZ23456789!@#$"
MEMORABLE_SYMBOLS = "!@$%^"
CONSONANTS = "bcdfghjklmnpqrstvwxyz"
VOWELS = "aeiou"

MEMORABLE_WORDS = (
    "Apple", "Beach", "Cloud", "Dance", "Eagle", "Flame", "Grace", "Happy",
    "Island", "Jungle", "Knight", "Lucky", "Magic", "Noble", "Ocean", "Peace",
    "Queen", "River", "Stone", "Tiger", "Unity", "Voice", "Water", "Xenon",
    "Youth", "Zebra", "Bright", "Cosmic", "Dream", "Energy", "Forest", "Giant",
    "Harbor", "Image", "Jewel", "Kite", "Light", "Mountain", "Nature", "Orange",
    "Piano", "Quick", "Rocket", "Storm", "Travel", "Universe", "Valley", "Wind",
    "Xray", "Yellow", "Zephyr", "Angel", "Brave", "Castle", "Dragon", "Empire",
    "Faith", "Garden", "Honor", "Ice", "Jazz", "King", "Legend", "Moon",
    "Night", "Oak", "Power", "Quest", "Rain", "Star", "Thunder", "Ultra",
    "Victory", "Wisdom", "Express", "Yacht", "Zone", "Art", "Book", "Code",
    "Door", "Earth", "Fire", "Gold", "Heart", "Iron", "Joy", "Key",
)

COMMON_PASSWORDS = frozenset(
    """
    password 123456 123456789 guest qwerty 12345678 111111 12345 col123456 123123
    1234567 1234 1234567890 000000 555555 666666 123321 654321 7777777 123
    D1lakiss 777777 abc123 1234560 1234565 0123456789 987654321 1234qwer admin
    qwertyuiop Pass@word1 password1 1q2w3e4r 1q2w3e qwertyui 123456a Password1
    password123 123456789a q1w2e3r4 qwer1234 sec4ever password2 gfhjkm qazwsxedc
    159357 p@ssw0rd pokemon qwerty123 Gbt3fC79ZmMEFUFJ asdfghjkl 147258369 qwerty12
    qwerty1 192837465 soccer a1b2c3d4 FQRG7CS493 hello letmein football monkey
    charlie aa123456 donald password12 qwer123 dragon master 696969 mustang michael
    superman 1qaz2wsx shadow baseball welcome 123qwe freedom whatever nicole jordan
    cameron secret summer princess amanda jesus jessica lovely access flower
    computer gydw test info administrator root demo user temp 1111 2222 3333 4444
    5555 6666 7777 8888 9999 0000 abcd abcde abcdef abcdefg abcdefgh qwer qwert
    asdf asdfg asdfgh zxcv zxcvb zxcvbn zxcvbnm iloveyou trustno1 sunshine ashley
    bailey passw0rd login adm mysql toor pass oracle ftp pi puppet ansible ec2-user
    vagrant azureuser examples public sample sharing apache nginx www web mail
    email data Password PASSWORD Pass PASS passwd pwd Secret SECRET private
    Private PRIVATE confidential
    """.split()
)


class PasswordOptions(BaseModel):
    """Generator settings. Length applies to classic, typable and pronounceable."""

    mode: PasswordMode = "classic"
    length: int = Field(default=12, ge=4, le=128)
    include_uppercase: bool = True
    include_lowercase: bool = True
    include_numbers: bool = True
    include_symbols: bool = True
    exclude_similar: bool = False


class GeneratedPassword(BaseModel):
    password: str
    strength: Strength
    is_common: bool


def _classic(options: PasswordOptions, rng: Random) -> str:
    charset = ""
    if options.include_lowercase:
        charset += string.ascii_lowercase
    if options.include_uppercase:
        charset += string.ascii_uppercase
    if options.include_numbers:
        charset += string.digits
    if options.include_symbols:
        charset += SYMBOLS
    if options.exclude_similar:
        charset = "".join(c for c in charset if c not in SIMILAR_CHARS)
    if not charset:
        return ""
    return "".join(rng.choice(charset) for _ in range(options.length))


def _memorable(options: PasswordOptions, rng: Random) -> str:
    def word() -> str:
        return rng.choice(MEMORABLE_WORDS).capitalize()

    result = f"{word()}-{rng.randint(1, 99)}-{word()}"
    if options.include_symbols:
        result += rng.choice(MEMORABLE_SYMBOLS)
    return result + word()


def _typable(options: PasswordOptions, rng: Random) -> str:
    return "".join(rng.choice(SAFE_CHARSET) for _ in range(options.length))


def _pronounceable(options: PasswordOptions, rng: Random) -> str:
    syllable_count = max(3, options.length // 3)
    result = "-".join(
        rng.choice(CONSONANTS) + rng.choice(VOWELS) for _ in range(syllable_count)
    )
    if options.include_numbers:
        result += f"-{rng.randint(0, 99)}"
    if options.include_symbols:
        result += "!"
    return result


_GENERATORS = {
    "classic": _classic,
    "memorable": _memorable,
    "typable": _typable,
    "pronounceable": _pronounceable,
}


def generate_password(options: PasswordOptions, rng: Optional[Random] = None) -> str:
    """Generate a password; classic mode with no character sets yields ``""``."""
    rng = rng or secrets.SystemRandom()
    return _GENERATORS[options.mode](options, rng)


def password_strength(password: str) -> Strength:
    """Six-point score: two length steps and one point per character class."""
    score = sum(
        [
            len(password) >= 8,
            len(password) >= 12,
            any(c.islower() and c.isascii() for c in password),
            any(c.isupper() and c.isascii() for c in password),
            any(c.isdigit() for c in password),
            any(not (c.isascii() and c.isalnum()) for c in password),
        ]
    )
    if score <= 2:
        return "Weak"
    if score <= 4:
        return "Medium"
    return "Strong"


def is_common_password(password: str) -> bool:
    return (
        password in COMMON_PASSWORDS
        or password.lower() in COMMON_PASSWORDS
        or password.upper() in COMMON_PASSWORDS
    )


def generate(options: PasswordOptions, rng: Optional[Random] = None) -> GeneratedPassword:
    """Generate a password and rate it."""
    password = generate_password(options, rng)
    return GeneratedPassword(
        password=password,
        strength=password_strength(password),
        is_common=is_common_password(password),
    )
