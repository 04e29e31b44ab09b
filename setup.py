from setuptools import find_packages, setup

setup(
    name="modhooks",
    version="0.1.0",
    description="Priority-ordered hook registry with wildcard matching and filter/action/until dispatch",
    packages=find_packages(include=["modhooks", "modhooks.*"]),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2",
        "PyYAML",
        "Jinja2",
        "MarkupSafe",
    ],
    extras_require={
        "ui": ["fastapi", "uvicorn"],
        "test": ["pytest", "httpx", "fastapi"],
    },
    entry_points={
        "console_scripts": [
            "modhooks = modhooks.cli:main",
        ],
    },
)
