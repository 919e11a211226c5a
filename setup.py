from setuptools import setup, find_packages

setup(
    name="vitalscore",
    version="0.1.0",
    description="Composite daily health score from blood pressure, sleep and activity records",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "python-dotenv",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
)
