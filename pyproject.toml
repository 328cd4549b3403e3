[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bingtray"
version = "0.0.1"
description = "Rotate your desktop wallpaper through Bing's daily images from markets around the world"
requires-python = ">=3.10"
keywords = ["bing", "wallpaper", "desktop", "background", "menu"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment",
]
dependencies = [
    "requests>=2.28",
    "beautifulsoup4>=4.11",
    "platformdirs>=3.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "responses>=0.23",
]

[project.scripts]
bingcli = "bingtray.cli:main"
bingtray = "bingtray.tray:main"

[tool.hatch.build.targets.wheel]
packages = ["bingtray"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
