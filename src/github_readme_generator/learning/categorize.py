from github_readme_generator.clients.models.github import Repository

UNKNOWN_CATEGORY = "unknown"

FRONTEND_TOPICS = frozenset({"react", "vue", "angular"})
BACKEND_TOPICS = frozenset({"api", "backend", "server"})
ML_TOPICS = frozenset({"ml", "ai", "machine-learning", "data-science"})

TOPIC_SUFFIXES: list[tuple[frozenset[str], str]] = [
    (FRONTEND_TOPICS, "-frontend"),
    (BACKEND_TOPICS, "-backend"),
    (ML_TOPICS, "-ml"),
]

NAME_SUFFIXES: list[tuple[tuple[str, ...], str]] = [
    (("awesome", "list"), "-list"),
    (("boilerplate", "starter", "template"), "-template"),
    (("docs", "documentation"), "-docs"),
]


def topic_suffix(topics: list[str]) -> str:
    lowered_topics = {topic.lower() for topic in topics}

    for suffix_topics, suffix in TOPIC_SUFFIXES:
        if lowered_topics & suffix_topics:
            return suffix

    return ""


def name_suffix(name: str, description: str | None) -> str:
    name_and_description = f"{name} {description or ''}".lower()

    for needles, suffix in NAME_SUFFIXES:
        if any(needle in name_and_description for needle in needles):
            return suffix

    return ""


def categorize(repository: Repository) -> str:
    """Map a repository to a coarse category key such as `python-ml` or `javascript-frontend-template`.

    The base is the lowercased primary language. At most one topic suffix and one name suffix are appended.
    """

    base = repository.language.lower() if repository.language else UNKNOWN_CATEGORY

    return base + topic_suffix(repository.topics) + name_suffix(repository.name, repository.description)


def general_category(category: str) -> str:
    """The part of a category key before its first suffix."""

    return category.split("-", 1)[0]
