"""Setup script for UrbanSim package."""

from setuptools import find_packages, setup

setup(
    name='urbansim',
    version='0.1.0',
    author='UrbanSim Team',
    author_email='example@example.com',
    description='Deterministic city layout synthesis and traffic simulation for urban planning tools',
    long_description=open('README.md', encoding='utf-8').read(),
    long_description_content_type='text/markdown',
    url='https://github.com/example/urbansim',
    packages=find_packages(exclude=['tests', 'tests.*']),
    include_package_data=True,
    package_data={
        'urbansim.config': ['*.yaml'],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.8',
    install_requires=[
        'numpy',
        'pandas',
        'pyyaml',
    ],
    extras_require={
        'dev': [
            'pytest',
            'flake8',
            'black',
        ],
    },
)
