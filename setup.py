#!/usr/bin/env python3
"""
Setup script for Disc Golf Content Crawler.

Installs the discgolf_crawler package with all dependencies.
"""

from setuptools import setup, find_packages
import os

# Read the README for long description
here = os.path.abspath(os.path.dirname(__file__))
readme_path = os.path.join(here, 'README.md')

if os.path.exists(readme_path):
    with open(readme_path, 'r', encoding='utf-8') as f:
        long_description = f.read()
else:
    long_description = 'Converts legacy disc golf exercise pages to importable JSON and Markdown.'

# Read requirements
requirements_path = os.path.join(here, 'requirements.txt')
install_requires = []
if os.path.exists(requirements_path):
    with open(requirements_path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith('#'):
                install_requires.append(line)

setup(
    name='discgolf-crawler',
    version='1.0.0',
    author='Disc Golf Training Team',
    author_email='',
    description='Converts legacy disc golf exercise pages to importable JSON and Markdown',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=['tests', 'tests.*']),
    include_package_data=True,
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Internet :: WWW/HTTP :: Indexing/Search',
        'Topic :: Text Processing :: Markup :: HTML',
        'Topic :: Text Processing :: Markup :: Markdown',
    ],
    python_requires='>=3.10',
    install_requires=install_requires,
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'discgolf-crawler=discgolf_crawler.main:run',
        ],
    },
    keywords=[
        'crawler',
        'scraper',
        'markdown',
        'wordpress',
        'html-to-markdown',
        'disc-golf',
    ],
)
