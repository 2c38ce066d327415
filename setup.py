import os

from setuptools import setup, find_packages

__version__ = "0.1"

tests_require = ['pytest', 'mypy', 'pycodestyle', 'types-setuptools']

extras_require = {
    'test': tests_require,
}


def read(fname):
    return open(os.path.join(os.path.dirname(__file__), fname)).read()


setup(
    name='python-s7stream',
    version=__version__,
    description='Byte-exact reader and writer for Siemens S7 primitive data types',
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={'s7stream': ['py.typed']},
    license='MIT',
    long_description=read('README.rst'),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Topic :: System :: Hardware",
        "Intended Audience :: Developers",
        "Intended Audience :: Manufacturing",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires='>=3.9',
    extras_require=extras_require,
    tests_require=tests_require,
    test_suite="tests",
)
