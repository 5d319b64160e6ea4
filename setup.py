from setuptools import setup, find_packages


setup(
    name="covid-red-blue",
    version="0.1",
    description=(
        "Compares COVID-19 cases in U.S. states by their 2016 presidential vote majority."
    ),
    python_requires=">=3.9",
    install_requires=[
        "Click",
        "matplotlib",
        "numpy",
        "pandas",
        "pydantic>=2.7",
        "requests",
        "scipy",
        "sentry-sdk",
        "statsmodels",
        "structlog",
    ],
    extras_require={"test": ["pytest"]},
    entry_points="""
        [console_scripts]
        covid-red-blue=run:entry_point
    """,
    py_modules=["run"],
    packages=find_packages(exclude=["tests", "tests.*"]),
)
