import pytest

from github_readme_generator.generation.commands import (
    DEFAULT_INSTALL_COMMAND,
    DEFAULT_USAGE_COMMAND,
    install_command_for,
    usage_command_for,
)


@pytest.mark.parametrize(
    ("language", "install_command", "usage_command"),
    [
        ("JavaScript", "npm install", "npm start"),
        ("TypeScript", "npm install", "npm start"),
        ("Python", "pip install -r requirements.txt", "python main.py"),
        ("Ruby", "bundle install", "ruby app.rb"),
        ("Go", "go mod download", "go run main.go"),
        ("Rust", "cargo build", "cargo run"),
        ("Java", "mvn install", "java -jar target/app.jar"),
        ("C#", "dotnet restore", "dotnet run"),
    ],
)
def test_known_languages(language: str, install_command: str, usage_command: str):
    assert install_command_for(language) == install_command
    assert usage_command_for(language) == usage_command


@pytest.mark.parametrize("language", ["Haskell", "", None])
def test_unknown_languages(language: str | None):
    assert install_command_for(language) == DEFAULT_INSTALL_COMMAND
    assert usage_command_for(language) == DEFAULT_USAGE_COMMAND
