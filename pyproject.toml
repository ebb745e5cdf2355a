[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "httpjar"
version = "0.1.0"
description = "HTTP connection, DNS, redirect and proxy settings, default headers, and an RFC 6265 cookie jar."
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "cookies", "cookie-jar", "rfc6265", "proxy", "dns", "redirect"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["httpjar"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
