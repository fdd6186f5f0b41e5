from setuptools import setup, find_packages

setup(
    name="card_order_qa",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    include_package_data=True,
    install_requires=[
        "playwright==1.52.0",
        "pydantic>=2",
        "python-dotenv",
        "pyyaml",
        "requests",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    scripts=["card-order-qa.py"],
    python_requires='>=3.10',
)
