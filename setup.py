import codecs
from setuptools import setup
import os

classifiers = """\
Development Status :: 4 - Beta
Environment :: Console
Intended Audience :: Developers
Intended Audience :: System Administrators
License :: OSI Approved :: MIT License
Operating System :: POSIX :: Linux
Operating System :: MacOS
Programming Language :: Python :: 3
Topic :: Software Development :: Build Tools
Topic :: System :: Installation/Setup
"""

version = '0.1'

HERE = os.path.abspath(os.path.dirname(__file__))

def read(*parts):
    """
    Build an absolute path from *parts* and and return the contents of the
    resulting file.  Assume UTF-8 encoding.
    """
    with codecs.open(os.path.join(HERE, *parts), "rb", "utf-8") as f:
        return f.read()

setup(
        name='goupdate',
        version=version,
        description="Download and install Go toolchain releases",
        packages=["goupdate"],
        long_description=read("README.md"),
        long_description_content_type="text/markdown",
        classifiers=[c for c in classifiers.split("\n") if c],
        keywords='go golang toolchain installer',
        license='MIT',
        python_requires='>=3.8',
        include_package_data=True,
        zip_safe=True,
        install_requires=[
            'requests'
        ],
        extras_require={
            'test': ['pytest'],
        },
        entry_points={
            'console_scripts': [
                'goupdate=goupdate.cli_releases:main',
            ],
        },
)
