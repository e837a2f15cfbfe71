#!/usr/bin/env python3
from setuptools import setup

setup(
    name='autoless',
    version='0.2',
    packages=[
        'autoless',
        'autoless.app',
        'autoless.commands',
        'autoless.commands.builtins'],
    scripts=['scripts/autoless'],
    install_requires=[
        'docopt',
        'watchdog'],
    extras_require={
        'test': ['pytest']},
    python_requires='>=3.8',
    license='Apache License, Version 2.0',
    description='Compile LESS projects to CSS whenever their sources are saved'
)
