# setup.py
from setuptools import setup, find_packages

setup(
    name="ember",
    version="0.3.0",
    description="A small embeddable expression language with a host function interface",
    packages=find_packages(include=["ember", "ember.*", "ember_lsp", "ember_lsp.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pygls>=1.0,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "ember-ls=ember_lsp.server:main",
        ],
    },
    zip_safe=False,
)
