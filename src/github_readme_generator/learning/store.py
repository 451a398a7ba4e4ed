import threading
from collections.abc import Sequence
from logging import Logger

from fastmcp.utilities.logging import get_logger

from github_readme_generator.learning.categorize import general_category
from github_readme_generator.learning.models import ReadmePattern, SectionPattern
from github_readme_generator.learning.similarity import similarity

PATTERN_SIMILARITY_THRESHOLD = 0.7
TITLE_SIMILARITY_THRESHOLD = 0.8
MAX_POSITION_DISTANCE = 2


def titles_match(first: SectionPattern, second: SectionPattern) -> bool:
    return similarity(first.title.lower(), second.title.lower()) > TITLE_SIMILARITY_THRESHOLD


def section_similarity(first_sections: Sequence[SectionPattern], second_sections: Sequence[SectionPattern]) -> float:
    """The share of distinct (lowercased) section titles that appear in both lists at roughly the same position.

    Matching is greedy and one-to-one: each section of the first list takes the first unused section of the
    second list whose title is similar and whose position is within two places.
    """

    unique_titles = {section.title.lower() for section in first_sections} | {section.title.lower() for section in second_sections}

    if not unique_titles:
        return 0.0

    matched: set[int] = set()

    for first_section in first_sections:
        for index, second_section in enumerate(second_sections):
            if index in matched:
                continue

            position_distance = abs(first_section.position - second_section.position)

            if titles_match(first_section, second_section) and position_distance <= MAX_POSITION_DISTANCE:
                matched.add(index)
                break

    return len(matched) / len(unique_titles)


def merge_sections(existing_sections: list[SectionPattern], new_sections: Sequence[SectionPattern]) -> None:
    """Fold new sections into existing ones in place, then re-sort by position."""

    for new_section in new_sections:
        matching_section = next((section for section in existing_sections if titles_match(section, new_section)), None)

        if matching_section is None:
            existing_sections.append(new_section.model_copy(deep=True, update={"frequency": 1}))
            continue

        old_frequency = matching_section.frequency

        matching_section.position = (matching_section.position * old_frequency + new_section.position) / (old_frequency + 1)
        matching_section.frequency = old_frequency + 1

        for keyword in new_section.keywords:
            if keyword not in matching_section.keywords:
                matching_section.keywords.append(keyword)

    existing_sections.sort(key=lambda section: section.position)


def most_frequent(patterns: Sequence[ReadmePattern]) -> ReadmePattern | None:
    """The pattern with the highest frequency. Ties go to the earliest stored pattern."""

    best: ReadmePattern | None = None

    for pattern in patterns:
        if best is None or pattern.frequency > best.frequency:
            best = pattern

    return best


class PatternStore:
    """Learned README patterns, grouped by repository category.

    The store owns every pattern it holds: patterns passed to `learn` are copied in and patterns handed out are
    copies, so callers can never mutate stored state.
    """

    logger: Logger

    def __init__(self, logger: Logger | None = None):
        self.logger = logger or get_logger(name=__name__)
        self._patterns: dict[str, list[ReadmePattern]] = {}
        self._lock = threading.Lock()

    def learn(self, category: str, pattern: ReadmePattern) -> None:
        """Merge a pattern into the most similar stored pattern of the category, or store it as a new one."""

        with self._lock:
            patterns = self._patterns.setdefault(category, [])

            best_index: int | None = None
            best_similarity = 0.0

            for index, stored_pattern in enumerate(patterns):
                pattern_similarity = section_similarity(stored_pattern.sections, pattern.sections)
                if pattern_similarity > best_similarity:
                    best_index, best_similarity = index, pattern_similarity

            if best_index is not None and best_similarity > PATTERN_SIMILARITY_THRESHOLD:
                stored_pattern = patterns[best_index]
                stored_pattern.frequency += 1
                merge_sections(stored_pattern.sections, pattern.sections)

                self.logger.debug(f"Merged pattern into {category}[{best_index}] (similarity {best_similarity:.2f})")
                return

            patterns.append(pattern.model_copy(deep=True, update={"frequency": 1}))

            self.logger.debug(f"Stored new pattern for {category}, {len(patterns)} patterns known")

    def best_pattern_for(self, category: str) -> ReadmePattern | None:
        """The most frequent pattern of the category, falling back to its general category."""

        with self._lock:
            patterns = self._patterns.get(category) or self._patterns.get(general_category(category)) or []

            if best := most_frequent(patterns):
                return best.model_copy(deep=True)

            return None

    def patterns_for(self, category: str) -> list[ReadmePattern]:
        with self._lock:
            return [pattern.model_copy(deep=True) for pattern in self._patterns.get(category, [])]

    def categories(self) -> dict[str, int]:
        """The number of stored patterns per category."""

        with self._lock:
            return {category: len(patterns) for category, patterns in self._patterns.items()}
