"""Replace gitmoji ``:shortcode:`` markers with the emoji they stand for."""

import emoji


def convert_gitmoji(text: str) -> str:
    # Gitmoji codes are a subset of the GitHub aliases; every alias converts.
    # The emoji replaces the code in place with no extra space. Unknown codes
    # are left untouched.
    return emoji.emojize(text, language="alias")
