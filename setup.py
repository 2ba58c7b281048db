from setuptools import setup, find_packages

setup(
    name="coincap-gauge",
    version="0.1",
    packages=find_packages(include=['src', 'src.*']),
    install_requires=[
        "numpy>=1.21.0",
        "requests>=2.26.0",
        "python-dotenv>=0.19.0",
        "pytz>=2021.1"
    ],
    extras_require={
        "test": ["pytest>=7.0"]
    },
    entry_points={
        "console_scripts": [
            "coincap-gauge=src.local_run:main"
        ]
    },
)
