from setuptools import setup, find_packages

setup(name='csvdoc',
      version='0.1.0',
      description='Immutable in-memory CSV documents with typed cell and column access',
      packages=find_packages(include=['csvdoc', 'csvdoc.*']),
      python_requires='>=3.8',
      install_requires=['numpy'],
      extras_require={
          'test': ['pytest'],
          'bench': ['pandas'],
      },
      zip_safe=False)
