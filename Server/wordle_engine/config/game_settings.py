"""
Game Configuration Constants Module

Game rule constants and the bundled word list used as the last fallback of
the word source. All game parameters are centralized here.
"""

import json
import os
from typing import Final, List

# Core Game Configuration Constants
MAX_ROUNDS: Final[int] = 6
"""
Maximum number of guess attempts allowed per game.
"""

WORD_LENGTH: Final[int] = 5


def _load_word_list() -> List[str]:
    """
    Load the bundled word list from wordles.json.

    Returns:
        List[str]: List of uppercase 5-letter words

    Raises:
        FileNotFoundError: If wordles.json file is not found
        ValueError: If the JSON is malformed, empty or contains invalid words
    """
    config_dir = os.path.dirname(os.path.abspath(__file__))
    json_file_path = os.path.join(config_dir, 'wordles.json')

    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            word_list = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Word list file not found: {json_file_path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in wordles.json: {e}")

    if not isinstance(word_list, list):
        raise ValueError("JSON file must contain an array of words")

    uppercase_words = [word.upper() for word in word_list]
    validate_word_list_integrity(uppercase_words)
    return uppercase_words


def validate_word_list_integrity(words: List[str]) -> bool:
    """
    Validates the integrity and consistency of a word list.

    Checks that the list is non-empty, that every entry is exactly
    WORD_LENGTH uppercase alphabetic characters and that there are no
    duplicates.

    Returns:
        bool: True if word list passes all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    if not words:
        raise ValueError("Word list cannot be empty")

    for index, word in enumerate(words):
        if len(word) != WORD_LENGTH:
            raise ValueError(f"Word at index {index} '{word}' is not {WORD_LENGTH} characters long")

        if not word.isalpha() or not word.isascii():
            raise ValueError(f"Word at index {index} '{word}' contains non-alphabetic characters")

        if not word.isupper():
            raise ValueError(f"Word at index {index} '{word}' is not in uppercase format")

    if len(words) != len(set(words)):
        duplicates = sorted(word for word in set(words) if words.count(word) > 1)
        raise ValueError(f"Duplicate words found in word list: {duplicates}")

    return True


# Curated fallback word database loaded from JSON file
WORD_LIST: Final[List[str]] = _load_word_list()
