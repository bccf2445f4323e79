from setuptools import setup, find_packages

setup(
    name="stencilgen",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[l.strip() for l in open("requirements.txt", encoding="utf-8") if l.strip() and not l.startswith("#")],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["stencilgen=stencilgen.__main__:main"]},
)
