import secrets
import string
from typing import Callable

# URL-safe alphabet: 64 symbols, so a 4-char suffix has 64**4 (~16.7M) values
URL_ALPHABET = string.ascii_letters + string.digits + "_-"

DEFAULT_SUFFIX_LENGTH = 4

SuffixGenerator = Callable[[], str]


def make_suffix_generator(size: int = DEFAULT_SUFFIX_LENGTH) -> SuffixGenerator:
    if size < 1:
        raise ValueError("Suffix size must be positive")

    def _generate() -> str:
        return "".join(secrets.choice(URL_ALPHABET) for _ in range(size))

    return _generate


random_suffix: SuffixGenerator = make_suffix_generator()
