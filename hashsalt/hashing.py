#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import hashlib
import random
import string
from enum import Enum
from typing import Iterable, List, Optional, Union

from hashsalt.ipc_schema import HashResult

SALT_LENGTH = 14

# Без 'm' и 'I', плюс 19 символов: всего 79 знаков
SALT_ALPHABET = (
    string.ascii_lowercase.replace("m", "")
    + string.ascii_uppercase.replace("I", "")
    + string.digits
    + "!#$%&()*+-./:;<=>?@"
)

_rng = random.SystemRandom()


class HashConfigError(ValueError):
    """Базовая ошибка конфигурации вызова compute_hash."""


class UnsupportedAlgorithmError(HashConfigError):
    pass


class SaltConflictError(HashConfigError):
    pass


class MissingInputError(HashConfigError):
    pass


class InvalidInputError(HashConfigError):
    """Строка или соль не кодируется в UTF-8 (например, одиночный суррогат)."""


def _check_utf8(value: str, what: str) -> None:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidInputError(
            f"{what} не кодируется в UTF-8 (позиция {e.start})"
        ) from None


class HashAlgorithm(str, Enum):
    MD5 = "MD5"
    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @property
    def hashlib_name(self) -> str:
        return self.value.lower()

    @property
    def hex_length(self) -> int:
        return hashlib.new(self.hashlib_name).digest_size * 2

    @classmethod
    def parse(cls, name: Union[str, "HashAlgorithm"]) -> "HashAlgorithm":
        """
        Приводит имя алгоритма к члену перечисления.
        Регистр и дефисы игнорируются: 'sha-256' -> SHA256.
        """
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            raise UnsupportedAlgorithmError(f"Неподдерживаемый алгоритм: {name!r}")
        key = name.strip().upper().replace("-", "").replace("_", "")
        try:
            return cls[key]
        except KeyError:
            supported = ", ".join(a.value for a in cls)
            raise UnsupportedAlgorithmError(
                f"Неподдерживаемый алгоритм: {name!r}. Допустимые: {supported}"
            ) from None


def generate_random_salt() -> str:
    """Генерирует соль из 14 неповторяющихся символов алфавита SALT_ALPHABET."""
    return "".join(_rng.sample(SALT_ALPHABET, SALT_LENGTH))


def _digest_hex(text: str, algorithm: HashAlgorithm) -> str:
    hash_func = hashlib.new(algorithm.hashlib_name)
    hash_func.update(text.encode("utf-8"))
    return "".join(f"{byte:02x}" for byte in hash_func.digest()).upper()


def compute_hash(
    strings: Optional[Union[str, Iterable[str]]],
    algorithm: Union[str, HashAlgorithm] = HashAlgorithm.SHA256,
    salt: Optional[str] = None,
    use_random_salt: bool = False,
    logger=None,
) -> Union[List[str], List[HashResult]]:
    """
    Вычисляет хеши строк, при необходимости дописывая соль в конец каждой.

    Если соль используется (фиксированная или случайная), каждый элемент
    результата - запись HashResult с порядковым номером от 1. Иначе
    возвращаются голые hex-строки в верхнем регистре.

    Конфигурация проверяется до обработки первой строки:
    частичного результата при ошибке не бывает.
    """
    try:
        if strings is None:
            raise MissingInputError("Не переданы строки для хеширования")
        algo = HashAlgorithm.parse(algorithm)
        if salt and use_random_salt:
            raise SaltConflictError(
                "Фиксированная соль и случайная соль взаимоисключающие"
            )
        if salt:
            _check_utf8(salt, "Соль")
        items = [strings] if isinstance(strings, str) else list(strings)
        for seq, text in enumerate(items, start=1):
            _check_utf8(text, f"Строка #{seq}")
    except HashConfigError as e:
        if logger:
            logger.error(f"Ошибка конфигурации хеширования: {e}")
        raise

    if logger:
        mode = "random" if use_random_salt else ("fixed" if salt else "none")
        logger.info(f"Хеширование {len(items)} строк, алгоритм {algo.value}, соль: {mode}")

    results = []
    salt_used = False
    for seq, text in enumerate(items, start=1):
        item_salt = generate_random_salt() if use_random_salt else salt
        if item_salt:
            text = text + item_salt
            salt_used = True
        digest = _digest_hex(text, algo)
        if logger:
            logger.debug(f"#{seq} {algo.value}: {digest}")
        results.append((seq, digest, item_salt or ""))

    if not salt_used:
        return [digest for _, digest, _ in results]
    return [
        HashResult(id=seq, hash=digest, salt=item_salt, algorithm=algo.value)
        for seq, digest, item_salt in results
    ]


def verify_hash(
    text: str,
    expected: str,
    algorithm: Union[str, HashAlgorithm] = HashAlgorithm.SHA256,
    salt: Optional[str] = None,
    logger=None,
) -> bool:
    """Сверяет строку (с солью, если задана) с ожидаемым хешем."""
    algo = HashAlgorithm.parse(algorithm)
    expected = expected.strip()
    if len(expected) != algo.hex_length:
        raise ValueError(
            f"Ожидаемый хеш {algo.value} должен содержать {algo.hex_length} hex-символов, "
            f"получено {len(expected)}"
        )
    if not all(c in string.hexdigits for c in expected):
        raise ValueError(f"Ожидаемый хеш не является hex-строкой: {expected!r}")

    result = compute_hash([text], algo, salt=salt, logger=logger)[0]
    actual = result if isinstance(result, str) else result.hash
    ok = actual == expected.upper()
    if logger:
        if ok:
            logger.info("Хеш совпадает")
        else:
            logger.warning(f"Хеш не совпадает: ожидался {expected.upper()}, получен {actual}")
    return ok
