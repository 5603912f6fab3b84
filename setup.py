from setuptools import find_packages, setup

setup(
  name="eddsa-poseidon",
  version="0.1.0",
  description="EdDSA signatures with a Poseidon challenge over BN254 embedded curves",
  long_description=open("README.md").read(),
  long_description_content_type="text/markdown",
  packages=find_packages(include=["eddsa_poseidon", "eddsa_poseidon.*"]),
  python_requires=">=3.9",
  classifiers=[
    "Programming Language :: Python :: 3",
    "Operating System :: OS Independent",
  ],
  install_requires=[
    "colorama>=0.4",
    "pynacl>=1.4",
    "tqdm>=4.62",
    "msgpack>=1.0",
    "xdg>=5.0",
  ],
  extras_require={
    "test": ["pytest", "pytest-sugar", "pytest-mock", "coverage", "mypy", "bandit"],
    "dev": ["tox", "isort", "yapf"],
  },
  include_package_data=True,
  entry_points=dict(
    console_scripts=["eddsa-poseidon = eddsa_poseidon.__main__:main"],
  ),
)
