from setuptools import setup, find_packages

setup(
    name="burgerpizza",
    version="1.0.0",
    packages=find_packages(include=["burgerpizza", "burgerpizza.*"]),
    install_requires=[
        "django>=4.2",
        "djangorestframework",
        "drf-spectacular",
        "djangorestframework-simplejwt",
        "psycopg2-binary",
        "python-decouple",
        "dj-database-url",
        "django-cors-headers",
        "requests",
        "Pillow",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-django",
        ],
    },
    python_requires=">=3.11",
)
