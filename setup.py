from setuptools import setup, find_namespace_packages


setup(
    name='bonding_engine',
    version='0.1',
    packages=find_namespace_packages(where="src", include=["bonding_engine*"]),
    package_dir={"": "src"},
    entry_points={
        'console_scripts': [
            'bonding_engine_api = bonding_engine.webapi.webapi:main',
        ],
    },
    python_requires=">=3.9",
    install_requires=[
        'flask',
        'flask-openapi3',
        'pydantic>=2',
        'python-dotenv',
    ],
    extras_require={
        'test': [
            'pytest',
            'hypothesis',
        ],
    },
)
