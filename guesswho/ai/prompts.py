"""Prompt templates sent to the text-generation model."""

GUESS_PROMPT_TEMPLATE = "User guessed: {guess}. Reply strictly with 'Yes' or 'No'."


def build_guess_prompt(guess: str) -> str:
    """Embed the player's raw guess in the Yes/No prompt."""
    return GUESS_PROMPT_TEMPLATE.format(guess=guess)
