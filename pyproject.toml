[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "starfly"
version = "0.1.0"
description = "A Galaga-style arcade shooter with waves of enemy flies and WebSocket pressure-pad controls"
requires-python = ">=3.10"
keywords = ["game", "arcade", "shooter", "galaga", "websocket", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "websockets",
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
starfly = "starfly.app:main"

[tool.hatch.build.targets.wheel]
packages = ["starfly"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
