def edit_distance(first: str, second: str) -> int:
    """The Levenshtein distance between two strings."""

    if len(first) < len(second):
        first, second = second, first

    previous_row: list[int] = list(range(len(second) + 1))

    for i, first_character in enumerate(first, start=1):
        current_row: list[int] = [i]

        for j, second_character in enumerate(second, start=1):
            cost = 0 if first_character == second_character else 1
            current_row.append(
                min(
                    previous_row[j] + 1,
                    current_row[j - 1] + 1,
                    previous_row[j - 1] + cost,
                )
            )

        previous_row = current_row

    return previous_row[-1]


def similarity(first: str, second: str) -> float:
    """Normalized Levenshtein similarity in [0, 1]. Case-sensitive.

    Either string being empty yields 0.0, including when both are empty.
    """

    if not first or not second:
        return 0.0

    return 1 - edit_distance(first, second) / max(len(first), len(second))
