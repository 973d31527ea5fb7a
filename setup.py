from setuptools import find_packages, setup

setup(
  name="jubsig",
  version="0.1.0",
  author="Jubsig developers",
  description="EdDSA signatures on the Jubjub curve with a Poseidon2 challenge, for use in zk circuits",
  long_description=open("README.md").read(),
  long_description_content_type="text/markdown",
  packages=find_packages(exclude=["tests"]),
  python_requires=">=3.9",
  classifiers=[
    "Programming Language :: Python :: 3",
    "License :: OSI Approved :: MIT License",
    "Operating System :: OS Independent",
  ],
  install_requires=[
    "blake3>=0.3",
    "colorama>=0.4",
    "pynacl>=1.4",
  ],
  extras_require={
    "test": ["pytest", "pytest-sugar", "pytest-mock", "coverage", "mypy", "bandit"],
    "dev": ["tox", "isort", "yapf"],
  },
  entry_points=dict(console_scripts=["jubsig = jubsig.__main__:main"],),
)
