from setuptools import setup

setup(
    name='cyk',
    version='0.1.0',
    packages=['cyk'],
    package_dir={'': 'src'},
    package_data={'cyk': ['resources/.cykrc']},
    python_requires='>=3.10',
    install_requires=[
        'frozendict>=2.3',
        'returns>=0.19',
        'toml>=0.10',
    ],
    extras_require={
        'test': ['pytest>=7.1'],
    },
    entry_points={
        'console_scripts': ['cyk = cyk.cli:main'],
    },
    license='GNU GPLv3',
    author='Dominic Steinhoefel',
    author_email='dominic.steinhoefel@cispa.de',
    description='CYK recognizer for context-free grammars in second or Chomsky normal form'
)
