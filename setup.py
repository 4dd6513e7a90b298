from setuptools import setup, find_packages

setup(
    name="linmotion-quiz",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        "click>=8.0",
        "openpyxl>=3.0",
        "python-docx>=0.8",
        "flask>=2.2",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "linmotion-quiz=linmotion_quiz.cli:main",
        ],
    },
)
