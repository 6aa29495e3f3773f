from errors import InvalidInput

WORD_LENGTH = 5
MAX_GUESSES = 6

# Per-letter feedback values
CORRECT = "correct"
PRESENT = "present"
ABSENT = "absent"

SHARE_GLYPHS = {CORRECT: "🟩", PRESENT: "🟨", ABSENT: "⬛"}


def normalize_guess(raw_guess: str) -> str:
    """Strip and uppercase a raw guess, rejecting anything that is not 5 letters."""
    guess = (raw_guess or "").strip().upper()
    if len(guess) != WORD_LENGTH:
        raise InvalidInput(f"Guess must be {WORD_LENGTH} letters")
    if not guess.isalpha():
        raise InvalidInput("Guess must contain only letters")
    return guess


# Evaluate a guess against the solution.
def evaluate_guess(guess: str, solution: str) -> list[str]:
    guess = guess.upper()
    solution = solution.upper()
    if len(guess) != len(solution):
        raise InvalidInput(f"Guess must be {len(solution)} letters")

    feedback = [None] * len(solution)

# First pass: mark correct positions and count them per letter
    correct_counts = {}
    for i, (s, g) in enumerate(zip(solution, guess)):
        if g == s:
            feedback[i] = CORRECT
            correct_counts[g] = correct_counts.get(g, 0) + 1

# Second pass: earlier positions claim "present" first
    present_counts = {}
    for i, g in enumerate(guess):
        if feedback[i] == CORRECT:
            continue
        claimed = correct_counts.get(g, 0) + present_counts.get(g, 0)
        if g in solution and claimed < solution.count(g):
            feedback[i] = PRESENT
            present_counts[g] = present_counts.get(g, 0) + 1
        else:
            feedback[i] = ABSENT

    return feedback


def is_winning_feedback(feedback) -> bool:
    return len(feedback) == WORD_LENGTH and all(f == CORRECT for f in feedback)


def absent_letters(guesses) -> set[str]:
    """
    Letters that can be shown as known-absent on the keyboard.

    A letter qualifies only if some occurrence of it was marked absent and no
    occurrence of it was ever marked present or correct in any guess.

    Args:
        guesses: Iterable of {"word": str, "feedback": [str, ...]} dicts

    Returns:
        Set of uppercase letters
    """
    marked_absent = set()
    found = set()
    for guess in guesses:
        for letter, mark in zip(guess["word"].upper(), guess["feedback"]):
            if mark == ABSENT:
                marked_absent.add(letter)
            elif mark in (CORRECT, PRESENT):
                found.add(letter)
    return marked_absent - found


def share_text(guesses, days_since_launch, title: str = "Wordle") -> str:
    """
    Render the shareable result block for a finished or in-progress game.

    Args:
        guesses: Guess history, oldest first
        days_since_launch: Puzzle number shown in the header
        title: Game title for the header line

    Returns:
        Header line, blank line, then one glyph row per guess. Empty string
        when there is nothing to share.
    """
    if not days_since_launch or not guesses:
        return ""

    won = any(is_winning_feedback(g["feedback"]) for g in guesses)
    score = len(guesses) if won else "X"
    lines = [f"{title} {days_since_launch:,} {score}/{MAX_GUESSES}", ""]
    for guess in guesses:
        lines.append("".join(SHARE_GLYPHS.get(f, SHARE_GLYPHS[ABSENT]) for f in guess["feedback"]))
    return "\n".join(lines)
