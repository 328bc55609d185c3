"""
Installation setup for futdash
"""
import configparser
import pathlib

import setuptools

# Establish project directory
project_root: pathlib.Path = pathlib.Path(__file__).resolve().parent

# Read config details to determine version-ing
config_file = project_root.joinpath("futdash/resources/futdash.properties")
config = configparser.ConfigParser()
if config_file.is_file():
    config.read(str(config_file))


def read_requirements(file_name: str) -> list:
    """
    Requirements listed in a file next to this one, if it exists
    :param file_name: Requirements file name
    :return: Requirement lines
    """
    requirements_file = project_root.joinpath(file_name)
    if not requirements_file.is_file():
        return []
    return [
        line.strip()
        for line in requirements_file.open(encoding="utf-8").readlines()
        if line.strip() and not line.startswith("#")
    ]


setuptools.setup(
    name="futdash",
    version=config.get("FUTDASH", "version", fallback="1.0.0+fallback"),
    description="Owned players table and SBC rankings for FC Ultimate Team",
    long_description=project_root.joinpath("README.md").open(encoding="utf-8").read()
    if project_root.joinpath("README.md").is_file()
    else "",
    long_description_content_type="text/markdown",
    license="MIT",
    python_requires=">=3.9",
    classifiers=[
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python",
        "Framework :: AsyncIO",
        "Topic :: Games/Entertainment",
    ],
    keywords=[
        "EA Sports FC",
        "Ultimate Team",
        "SBC",
        "Trading Cards",
        "Dashboard",
    ],
    include_package_data=True,
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    package_data={"futdash": ["resources/*.properties"]},
    install_requires=read_requirements("requirements.txt"),
    extras_require={"test": read_requirements("requirements_test.txt")},
    entry_points={"console_scripts": ["futdash=futdash.__main__:main"]},
)
