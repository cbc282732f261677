"""
textdirectory: module for reading and writing text/directory and vCard files

Description
-----------

Parses RFC 2425 text/directory streams into content lines, tracking the
profile each line belongs to, and hands them to pluggable profiles that build
directory objects. Ships the vCard 3.0 profile of RFC 2426. Serializes
content lines and vCards back to folded text.

Requirements
------------

Requires python 3.8 or later, dateutil 2.7.0 or later and pytz.
"""

from setuptools import setup, find_packages

doclines = (__doc__ or '').splitlines()

setup(name = "textdirectory",
      version = "0.1.0",
      license = "Apache",
      zip_safe = True,
      entry_points = {
            'console_scripts': [
                  'vcard_cat = textdirectory.vcard_cat:main',
            ]
      },
      include_package_data = True,
      python_requires = ">=3.8",
      install_requires = ["python-dateutil >= 2.7.0", "pytz"],
      extras_require = {"test": ["pytest"]},
      platforms = ["any"],
      packages = find_packages(exclude=["tests", "tests.*"]),
      description = "A Python package for parsing and creating "
                    "text/directory and vCard files",
      long_description = "\n".join(doclines[2:]),
      keywords = ['vcard', 'vcf', 'text/directory', 'rfc2425', 'rfc2426'],
      test_suite="tests",
      classifiers =  """
      Development Status :: 4 - Beta
      Environment :: Console
      Intended Audience :: Developers
      License :: OSI Approved :: Apache Software License
      Natural Language :: English
      Operating System :: OS Independent
      Programming Language :: Python
      Programming Language :: Python :: 3
      Topic :: Text Processing""".strip().splitlines()
      )
