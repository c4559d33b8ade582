"""Setup script for matfx package."""

from setuptools import setup, find_packages

setup(
    name='matfx',
    version='1.0',
    packages=find_packages(include=['matfx', 'matfx.*']),
    package_data={'matfx.materials': ['materials.yaml']},
    python_requires='>=3.9',
    install_requires=[
        'numpy>=1.20.0',
        'pyyaml>=5.4',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
            'scipy>=1.9.0',
        ],
    },
)
