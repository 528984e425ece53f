[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "k8gb"
version = "0.1.0"
description = "Global server load balancing primitives: Gslb resources, spec defaults and validation, DNS endpoint computation and a fake DNS server"
requires-python = ">=3.10"
keywords = ["gslb", "dns", "load-balancing", "failover", "round-robin", "external-dns"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: Name Service (DNS)",
    "Topic :: System :: Networking",
]
dependencies = [
    "dnspython",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["k8gb"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
