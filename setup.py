import re

from setuptools import find_packages, setup


def get_version():
    with open('primtree/version.py') as f:
        return re.search(r"__version__ = '([^']+)'", f.read()).group(1)


setup(name='primtree',
      version=get_version(),
      description="Minimum spanning trees with Prim's algorithm",
      packages=find_packages(exclude=['tests', 'tests.*']),
      python_requires='>=3.9',
      install_requires=['numpy>=1.20', 'click>=7.0'],
      extras_require={'test': ['pytest>=6.0', 'scipy>=1.6']},
      entry_points={'console_scripts': ['primtree=primtree.__main__:main']})
