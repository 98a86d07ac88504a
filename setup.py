"""Setup script for pycmac - pure Python package, libcrypto is opened at runtime via CFFI ABI mode"""

from setuptools import setup

setup(
    name="pycmac",
    version="0.1.0",
    description="CMAC (RFC 4493 / NIST SP 800-38B) message authentication over any 128-bit block cipher",
    packages=["pycmac"],
    package_data={"pycmac": ["libcrypto_cdef.h"]},
    python_requires=">=3.10",
    install_requires=["cffi>=1.15"],
    extras_require={"test": ["pytest", "pycryptodome"]},
)
