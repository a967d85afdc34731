[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mdnsengine"
version = "0.1.0"
description = "Multicast DNS records, messages, name probing, hostname assertion, service providing and resolving"
requires-python = ">=3.10"
keywords = ["mdns", "dns-sd", "zeroconf", "multicast", "service discovery"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Framework :: AsyncIO",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["mdnsengine"]

[tool.pytest.ini_options]
addopts = "-ra"
