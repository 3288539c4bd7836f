from setuptools import setup, find_packages

setup(
    name="stationgeo",
    version="0.1.0",
    packages=find_packages(exclude=["*.tests", "*.tests.*"]),
    install_requires=[
        "pandas>=1.3.0",
        "requests>=2.26.0",
        "pycountry>=22.0.0",
        "python-dotenv>=0.19.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        'console_scripts': [
            'stationgeo-validate=stationgeo.tools.validate:main',
            'stationgeo-fix=stationgeo.tools.fix_coordinates:main',
        ],
    },
    python_requires=">=3.8",
)
