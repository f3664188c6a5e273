import re
from setuptools import setup
from codecs import open
from os import path

# Load the README file for use in the long description
local_dir = path.abspath(path.dirname(__file__))
with open(path.join(local_dir, "README.rst"), encoding="utf-8") as f:
  long_description = f.read()

# Read package metadata without importing the package, whose dependencies may not be installed yet.
with open(path.join(local_dir, "tablefield", "__init__.py"), encoding="utf-8") as f:
  metadata = dict(re.findall(r'^__(version|author|license)__ = "([^"]*)"', f.read(), re.M))

requires = [
  "iso8601",
]

tests_requires = [
  "nose2",
  "nose2[coverage_plugin]",
]

extras_require = {
  "test": tests_requires,
  "lint": ["pylint", "pynt"],
}

setup(
  name="tablefield",
  version=metadata["version"],
  description="Typed, dirty-tracking field values for tabular records",
  long_description=long_description,
  author=metadata["author"],
  license=metadata["license"],
  classifiers=[
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "License :: OSI Approved :: Mozilla Public License 2.0 (MPL 2.0)",
    "Programming Language :: Python :: 3",
    "Topic :: Database",
    "Topic :: Database :: Front-Ends",
    "Operating System :: MacOS :: MacOS X",
    "Operating System :: Microsoft :: Windows",
    "Operating System :: Unix",
  ],
  keywords="table record field dirty-tracking",
  packages=["tablefield", "tablefield.model"],
  python_requires=">=3.7",
  install_requires=requires,
  extras_require=extras_require,
  tests_require=tests_requires,
  test_suite="nose2.collector.collector",
)
