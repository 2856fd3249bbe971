import sys
from setuptools import setup

with open('requirements.txt', 'r') as f:
    install_requires = f.read().strip().split()

needs_pytest = {'pytest', 'test', 'ptr'}.intersection(sys.argv)
pytest_runner = ['pytest-runner'] if needs_pytest else []

setup(
    name='svgextract',
    version='0.1.0',
    description='Extract shapes, styles and gradients from SVG files.',
    license='LGPL 3',
    python_requires='>=3.8',
    package_dir={'': 'src'},
    packages=['svgextract'],
    install_requires=install_requires,
    extras_require={'test': ['pytest']},
    entry_points={'console_scripts': ['svg2json = svgextract:main']},
    setup_requires=[] + pytest_runner
)
