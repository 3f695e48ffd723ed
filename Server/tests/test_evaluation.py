from wordle_engine.models.game import LetterStatus
from wordle_engine.services.game_service import evaluate_guess

C = LetterStatus.CORRECT
P = LetterStatus.PRESENT
A = LetterStatus.ABSENT


def test_repeated_letters_consume_target_letters_once():
    # E@0 takes target E@2, S@3 takes S@0, E@4 takes E@3
    assert evaluate_guess("ERASE", "SPEED") == [P, A, A, P, P]


def test_exact_match_is_all_correct():
    assert evaluate_guess("HELLO", "HELLO") == [C, C, C, C, C]


def test_disjoint_letters_are_all_absent():
    assert evaluate_guess("QUICK", "HELLO") == [A, A, A, A, A]
    assert evaluate_guess("JUMPS", "CRANE") == [A, A, A, A, A]


def test_world_against_hello():
    assert evaluate_guess("WORLD", "HELLO") == [A, P, A, C, A]


def test_exact_match_consumes_letter_before_present_scan():
    # The only L in SPOOL is matched in place, so the earlier L is absent
    assert evaluate_guess("SKILL", "SPOOL") == [C, A, A, A, C]


def test_present_marks_follow_left_to_right_order():
    assert evaluate_guess("LLAMA", "HALLO") == [P, P, P, A, A]


def test_extra_copies_beyond_target_count_are_absent():
    assert evaluate_guess("EERIE", "THEME") == [P, A, A, A, C]
    assert evaluate_guess("ABBEY", "KEBAB") == [P, P, C, P, A]
