from setuptools import setup
import os
import re

# Function to extract version from version.py
def get_version(module_file):
    """Return the version listed as `__version__` in `module_file`."""
    version_path = os.path.join(os.path.dirname(__file__), module_file)
    if not os.path.exists(version_path):
        raise RuntimeError(f"Unable to find {module_file}.")

    with open(version_path, 'r', encoding='utf-8') as f:
        version_py = f.read()

    match = re.search("__version__ = ['\"]([^'\"]+)['\"]", version_py)
    if match:
        return match.group(1)
    raise RuntimeError(f"Unable to find __version__ string in {version_path}")

version = get_version('version.py')

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as f:
    requirements = [line.strip() for line in f if line.strip() and not line.startswith("#")]

setup(
    name="tubelist",
    version=version,
    author="Tubelist contributors",
    description="List a YouTube channel's videos, filtered into Shorts or long videos",
    long_description=long_description,
    long_description_content_type="text/markdown",
    # Flat layout: the application modules live at the repository root
    packages=["api", "services"],
    py_modules=["config", "exceptions", "logging_config", "main", "middleware", "models", "server", "utils", "version"],
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0", "httpx>=0.25", "httplib2>=0.19"],
    },
    entry_points={
        "console_scripts": [
            "tubelist=server:main",
        ],
    },
)
