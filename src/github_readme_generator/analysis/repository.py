from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, Field

from github_readme_generator.clients.models.github import Repository

UNKNOWN_LANGUAGE = "Unknown"

DEFAULT_STRUCTURES: dict[str, list[str]] = {
    "javascript": ["package.json", "src/", "public/", "README.md", ".gitignore"],
    "typescript": ["package.json", "tsconfig.json", "src/", "public/", "README.md", ".gitignore"],
    "python": ["requirements.txt", "setup.py", "src/", "tests/", "README.md", ".gitignore"],
    "java": ["pom.xml", "src/main/java/", "src/test/java/", "README.md", ".gitignore"],
    "go": ["go.mod", "main.go", "pkg/", "cmd/", "README.md", ".gitignore"],
    "ruby": ["Gemfile", "lib/", "spec/", "README.md", ".gitignore"],
    "rust": ["Cargo.toml", "src/", "tests/", "README.md", ".gitignore"],
    "php": ["index.php", "composer.json", "css/", "js/", "templates/", "README.md", ".gitignore"],
    "c#": ["*.csproj", "Program.cs", "src/", "README.md", ".gitignore"],
    "c": ["CMakeLists.txt", "Makefile", "src/", "include/", "README.md", ".gitignore"],
    "c++": ["CMakeLists.txt", "Makefile", "src/", "include/", "README.md", ".gitignore"],
}
GENERIC_STRUCTURE = ["src/", "README.md", "LICENSE", ".gitignore"]

LANGUAGE_REPOSITORY_TYPES: dict[str, str] = {
    "javascript": "node",
    "typescript": "node",
    "python": "python",
    "java": "java",
    "ruby": "ruby",
    "go": "go",
    "rust": "rust",
    "php": "php",
    "c#": "dotnet",
    "html": "web",
    "css": "web",
    "swift": "mobile",
    "kotlin": "mobile",
    "objective-c": "mobile",
    "r": "data-science",
    "jupyter notebook": "data-science",
}

MOBILE_MARKERS = ("AndroidManifest.xml", "Info.plist", "AppDelegate", "MainActivity")
DATA_SCIENCE_MARKERS = ("data/", "notebooks/", "dataset")
DATA_SCIENCE_TOPIC_MARKERS = ("data", "machine-learning", "ai")

TEST_MARKERS = ("test", "spec", "__tests__")
DOCS_MARKERS = ("docs", "documentation", "wiki", "readme", "contributing")
CI_MARKERS = (".github/workflows", ".travis.yml", "circle.yml", ".gitlab-ci.yml", ".github/actions")
CHANGELOG_MARKERS = ("changelog", "changes.md", "history.md")


class RepositoryAnalysis(BaseModel):
    """What the file listing and metadata of a repository say about how to build and run it."""

    name: str = Field(default="", description="The name of the repository.")
    description: str = Field(default="", description="The description of the repository.")
    language: str = Field(default=UNKNOWN_LANGUAGE, description="The detected primary language.")
    repo_type: str = Field(default="generic", description="The detected kind of project, e.g. `node`, `web` or `c-system`.")
    topics: list[str] = Field(default_factory=list, description="The topics of the repository.")
    structure: list[str] = Field(default_factory=list, description="The top-level entries of the repository.")
    license: str | None = Field(default=None, description="The name of the license.")
    has_tests: bool = Field(default=False, description="Whether the repository appears to contain tests.")
    has_docs: bool = Field(default=False, description="Whether the repository appears to contain documentation.")
    has_ci: bool = Field(default=False, description="Whether the repository appears to have continuous integration.")
    has_contributing: bool = Field(default=False, description="Whether the repository has contribution guidelines.")
    has_changelog: bool = Field(default=False, description="Whether the repository has a changelog.")
    install_command: str = Field(default="", description="The command that installs the project's dependencies.")
    run_command: str = Field(default="", description="The command that runs the project.")
    dependencies: list[str] = Field(default_factory=list, description="The runtime dependencies from package.json.")
    dev_dependencies: list[str] = Field(default_factory=list, description="The development dependencies from package.json.")


class LanguageAndCommands(BaseModel):
    language: str
    install_command: str
    run_command: str


def default_structure(language: str | None) -> list[str]:
    """A plausible top-level layout for a project in the language, used when the real listing is unavailable."""

    return list(DEFAULT_STRUCTURES.get((language or "").lower(), GENERIC_STRUCTURE))


def _contains_any(paths: Sequence[str], markers: Sequence[str]) -> bool:
    return any(marker in path.lower() for path in paths for marker in markers)


class ContentsIndex:
    """Case-insensitive file and extension lookups over a repository listing."""

    def __init__(self, contents: Sequence[str]):
        self.paths: list[str] = [path.lower() for path in contents]

    def has_file(self, filename: str) -> bool:
        filename = filename.lower()
        return any(path == filename or path.endswith(f"/{filename}") for path in self.paths)

    def has_extension(self, *extensions: str) -> bool:
        return any(path.endswith(f".{extension.lower()}") for path in self.paths for extension in extensions)


def detect_repository_type(repository: Repository, contents: Sequence[str] = ()) -> str:
    """Classify a repository into a coarse project type. The first matching rule wins."""

    name = repository.name.lower()
    description = (repository.description or "").lower()
    language = repository.language

    if ("linux" in name or "linux kernel" in description) and (
        language == "C" or any("Makefile" in path or "Kconfig" in path for path in contents)
    ):
        return "linux-kernel"

    if ("kernel" in name or "kernel" in description) and (language == "C" or any("Makefile" in path for path in contents)):
        return "kernel"

    if language in ("C", "C++") and any("Makefile" in path or "CMakeLists.txt" in path for path in contents):
        return "c-system"

    if any(path.endswith((".html", ".css")) or "index.html" in path or "style.css" in path for path in contents):
        return "web"

    if any(marker in path for path in contents for marker in MOBILE_MARKERS):
        return "mobile"

    if any(path.endswith(".ipynb") or any(marker in path for marker in DATA_SCIENCE_MARKERS) for path in contents) or any(
        marker in topic for topic in repository.topics for marker in DATA_SCIENCE_TOPIC_MARKERS
    ):
        return "data-science"

    return LANGUAGE_REPOSITORY_TYPES.get((language or "").lower(), "generic")


def _package_manager_commands(index: ContentsIndex, package_json: dict[str, Any] | None) -> tuple[str, str]:
    if not index.has_file("package.json"):
        return "npm install", "npm start"

    scripts: dict[str, Any] = (package_json or {}).get("scripts") or {}

    if index.has_file("yarn.lock"):
        tool, run_prefix, bare = "yarn", "yarn", "yarn"
    elif index.has_file("pnpm-lock.yaml"):
        tool, run_prefix, bare = "pnpm", "pnpm", "pnpm"
    else:
        tool, run_prefix, bare = "npm", "npm run", "npm run"

    if "dev" in scripts:
        run_command = f"{run_prefix} dev"
    elif "start" in scripts:
        run_command = f"{tool} start"
    else:
        run_command = bare

    return f"{tool} install", run_command


def detect_language_and_commands(  # noqa: PLR0911, PLR0912
    repository: Repository, contents: Sequence[str], package_json: dict[str, Any] | None = None
) -> LanguageAndCommands:
    """Detect the language of a project from its files and pick the commands that install and run it."""

    index = ContentsIndex(contents)
    language = (repository.language or UNKNOWN_LANGUAGE).lower()

    def result(detected_language: str, install_command: str, run_command: str) -> LanguageAndCommands:
        return LanguageAndCommands(language=detected_language, install_command=install_command, run_command=run_command)

    if language in ("javascript", "typescript") or index.has_file("package.json") or index.has_extension("js", "ts", "tsx"):
        detected = "TypeScript" if index.has_extension("ts", "tsx") or index.has_file("tsconfig.json") else "JavaScript"
        return result(detected, *_package_manager_commands(index, package_json))

    has_python_manifest = any(index.has_file(name) for name in ("requirements.txt", "setup.py", "pipfile"))

    if language == "python" or index.has_extension("py") or has_python_manifest:
        if index.has_file("pipfile"):
            return result("Python", "pipenv install", "pipenv run python main.py")
        if index.has_file("requirements.txt"):
            return result("Python", "pip install -r requirements.txt", "python main.py")
        if index.has_file("setup.py"):
            return result("Python", "pip install -e .", f"python -m {repository.name.replace('-', '_')}")
        return result("Python", "pip install -r requirements.txt", "python main.py")

    if language == "ruby" or index.has_extension("rb") or index.has_file("gemfile"):
        if index.has_file("gemfile"):
            return result("Ruby", "bundle install", "bundle exec ruby app.rb")
        return result("Ruby", "gem install bundler && bundle install", "ruby app.rb")

    has_gradle = index.has_file("build.gradle") or index.has_file("build.gradle.kts")

    if language == "java" or index.has_extension("java") or index.has_file("pom.xml") or has_gradle:
        if index.has_file("pom.xml"):
            return result("Java", "mvn install", "mvn exec:java")
        if has_gradle:
            return result("Java", "./gradlew build", "./gradlew run")
        return result("Java", "javac Main.java", "java Main")

    if language == "go" or index.has_extension("go") or index.has_file("go.mod"):
        if index.has_file("go.mod"):
            return result("Go", "go mod download", "go run .")
        return result("Go", "go get ./...", "go run main.go")

    if language == "rust" or index.has_extension("rs") or index.has_file("cargo.toml"):
        return result("Rust", "cargo build", "cargo run")

    if language == "php" or index.has_extension("php") or index.has_file("composer.json"):
        if index.has_file("composer.json"):
            return result("PHP", "composer install", "php -S localhost:8000")
        return result("PHP", "# No installation required for basic PHP projects", "php -S localhost:8000")

    if language == "c#" or index.has_extension("cs", "csproj"):
        return result("C#", "dotnet restore", "dotnet run")

    has_cpp_files = index.has_extension("cpp", "cc", "cxx")

    if language in ("c", "c++") or index.has_extension("c") or has_cpp_files:
        detected = "C++" if has_cpp_files else "C"
        if index.has_file("CMakeLists.txt"):
            return result(detected, "mkdir build && cd build && cmake ..", "cd build && make && ./main")
        if index.has_file("makefile"):
            return result(detected, "make", "./main")
        return result(detected, "g++ -o main main.cpp" if has_cpp_files else "gcc -o main main.c", "./main")

    return result(
        repository.language or UNKNOWN_LANGUAGE,
        "# Installation steps depend on your specific environment",
        "# Run commands depend on your specific environment",
    )


def analyze_repository(repository: Repository, contents: Sequence[str], package_json: dict[str, Any] | None = None) -> RepositoryAnalysis:
    """Analyze a repository from its metadata, its top-level listing and (for Node projects) its package.json."""

    language_and_commands = detect_language_and_commands(repository=repository, contents=contents, package_json=package_json)

    package_json = package_json or {}

    return RepositoryAnalysis(
        name=repository.name,
        description=repository.description or "",
        language=language_and_commands.language,
        repo_type=detect_repository_type(repository=repository, contents=contents),
        topics=list(repository.topics),
        structure=list(contents),
        license=repository.license.name if repository.license else None,
        has_tests=_contains_any(contents, TEST_MARKERS),
        has_docs=_contains_any(contents, DOCS_MARKERS),
        has_ci=_contains_any(contents, CI_MARKERS),
        has_contributing=_contains_any(contents, ("contributing",)),
        has_changelog=_contains_any(contents, CHANGELOG_MARKERS),
        install_command=language_and_commands.install_command,
        run_command=language_and_commands.run_command,
        dependencies=list(package_json.get("dependencies") or {}),
        dev_dependencies=list(package_json.get("devDependencies") or {}),
    )
