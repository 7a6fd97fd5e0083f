import ast
import os

from setuptools import find_packages, setup


def read_version():
    version_txt = os.path.join(
        os.path.dirname(os.path.abspath(__file__)),
        'src', 'installplan', '__init__.py',
    )
    with open(version_txt) as f:
        for line in f:
            if not line.startswith('__version__'):
                continue
            return ast.literal_eval(line.split('=', 1)[-1].strip())
    raise RuntimeError('failed to read package version')


# Metadata lives in setup.cfg, except what needs to be computed here.
setup(
    package_dir={'': 'src'},
    packages=find_packages('src'),
    version=read_version(),
)
