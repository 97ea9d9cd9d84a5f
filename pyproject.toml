[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "groupbot"
version = "0.1.0"
description = "Chat, game and utility features for group chat bots: canned replies, tarot, sign-in scores, sleep tracking, hot words and more"
requires-python = ">=3.10"
keywords = ["chatbot", "group chat", "tarot", "sign-in", "games"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Natural Language :: Chinese (Simplified)",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
    "Topic :: Games/Entertainment",
]
dependencies = []

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["groupbot"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
