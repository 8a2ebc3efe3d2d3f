# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="treemagic",
    version="0.1.0",
    description="Locate or install the shared-mime-info magic database used by tree_magic engines",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["treemagic", "treemagic.*"]),
    python_requires=">=3.8",
    install_requires=[
        "requests",
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
