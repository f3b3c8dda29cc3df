from setuptools import setup, find_namespace_packages

setup(
    name="pnl_graph",
    version="0.1",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["pnl_graph*"]),
    python_requires=">=3.8",
    install_requires=[
        'pandas',
        'numpy',
        'matplotlib',
        'pydantic',
        'python-dateutil',
        'requests'
    ],
    extras_require={
        'test': [
            'pytest'
        ]
    }
)
