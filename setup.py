from setuptools import setup, find_packages

setup(
    name="input-timeline",
    version="0.1.0",
    description="Scrolling timeline of controller button presses with press statistics",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pygame",  # Timeline window and gamepad polling
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-cov",
        ]
    },
    python_requires=">=3.7",
    entry_points={
        "console_scripts": [
            "input-timeline=input_timeline.main:main",
        ]
    },
)
