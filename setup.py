from setuptools import setup, find_namespace_packages

setup(
    name="photo-album",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["photo_album*"]),
    install_requires=[
        "SQLAlchemy>=2.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "photo-album=photo_album.launcher:main",
        ],
    },
    python_requires=">=3.10",
)
