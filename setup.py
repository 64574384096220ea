import os
from setuptools import setup


def read_requirements():
    """Read the list of required packages from 'requirements.txt', which is
    assumed to be in the same directory as this script."""
    req_file_path = os.path.join(os.path.dirname(os.path.realpath(__file__)),
                                 "requirements.txt")
    with open(req_file_path, 'r') as req_file:
        return list(line.strip() for line in req_file if line.strip())


setup(
    name='febv',
    version='0.1.0',
    packages=['febv'],
    description=('Shape function values, gradients and integration weights '
                 'on the boundaries of finite elements'),
    install_requires=read_requirements(),
    extras_require={'test': ['pytest']},
)
