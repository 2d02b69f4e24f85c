[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "meshcontrol"
version = "0.1.0"
description = "In-memory control-plane bookkeeping for a mesh VPN: namespaces, pre-auth keys, sharing, routes, IP allocation and OIDC helpers"
requires-python = ">=3.10"
keywords = ["vpn", "mesh", "control-server", "ip-allocation", "pre-auth-keys", "oidc"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]
dependencies = [
    "pynacl",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["meshcontrol"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
