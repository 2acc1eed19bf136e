"""
Norikae Navi Backend - Build Script

api/, api/v1/, middleware/ 는 __init__.py 없이 namespace package로 구성
=> find_namespace_packages 사용
"""

from setuptools import setup, find_namespace_packages


setup(
    name='norikae-navi',
    version='1.0.0',
    author='Norikae Navi Team',
    description='Itinerary normalization backend for the Japanese transit route search API',
    long_description='''
    FastAPI service that relays route searches to the upstream transit API
    and normalizes each route into walk/transit legs. Routes without precise
    leg detail are reconstructed from their pass-station list by resolving
    station names with bounded concurrency and voting on line names.
    ''',
    packages=find_namespace_packages(include=['norikae', 'norikae.*']),
    install_requires=[
        'fastapi>=0.100.0',
        'uvicorn>=0.22.0',
        'pydantic>=2.0',
        'python-dotenv>=1.0.0',
        'httpx>=0.24.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
            'pytest-asyncio>=0.21.0',
            'pytest-mock>=3.10.0',
        ],
    },
    zip_safe=False,
    python_requires='>=3.9',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Framework :: FastAPI',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
    ],
)
