from setuptools import setup, find_packages


def parse_requirements(file):
    try:
        with open(file) as fh:
            return [r.strip("\n") for r in fh.readlines() if not r.startswith("--")]
    except FileNotFoundError:
        return ""


def read_file_or_empty_str(file, comment_tag=None):
    try:
        with open(file) as fh:
            if comment_tag is not None:
                return "\n".join(
                    r.strip("\n") for r in fh.readlines() if not r.startswith(comment_tag)
                )
            return fh.read()
    except FileNotFoundError:
        return ""


README = read_file_or_empty_str("README.md")
VERSION = read_file_or_empty_str("VERSION", comment_tag="#").strip() or "0.1.0"

REQUIREMENTS = parse_requirements("requirements.txt")
EXTRA_REQUIREMENTS = {
    "dev": parse_requirements("requirements-dev.txt"),
}
EXTRA_REQUIREMENTS["all"] = EXTRA_REQUIREMENTS["dev"]

setup(
    name="pressure-management-core",
    version=VERSION,
    description="Valve head loss model and dynamic pressure reducing valve control",
    long_description=README,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    install_requires=REQUIREMENTS,
    extras_require=EXTRA_REQUIREMENTS,
    include_package_data=True,
    python_requires=">=3.8",
)
