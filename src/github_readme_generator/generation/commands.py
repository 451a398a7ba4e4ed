DEFAULT_INSTALL_COMMAND = "# Install dependencies according to your project requirements"
DEFAULT_USAGE_COMMAND = "# Run the application according to your project requirements"

INSTALL_COMMANDS: dict[str, str] = {
    "javascript": "npm install",
    "typescript": "npm install",
    "python": "pip install -r requirements.txt",
    "ruby": "bundle install",
    "go": "go mod download",
    "rust": "cargo build",
    "java": "mvn install",
    "c#": "dotnet restore",
}

USAGE_COMMANDS: dict[str, str] = {
    "javascript": "npm start",
    "typescript": "npm start",
    "python": "python main.py",
    "ruby": "ruby app.rb",
    "go": "go run main.go",
    "rust": "cargo run",
    "java": "java -jar target/app.jar",
    "c#": "dotnet run",
}


def install_command_for(language: str | None) -> str:
    return INSTALL_COMMANDS.get((language or "").lower(), DEFAULT_INSTALL_COMMAND)


def usage_command_for(language: str | None) -> str:
    return USAGE_COMMANDS.get((language or "").lower(), DEFAULT_USAGE_COMMAND)
