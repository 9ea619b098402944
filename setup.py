from setuptools import setup, find_namespace_packages

setup(
    name="exactDT",
    version="0.1",
    packages=find_namespace_packages(include=["exactdt", "exactdt.*"]),
    install_requires=[
        'numpy', 'numba', 'torch', 'tqdm',
    ],
    extras_require={
        'test': ['pytest', 'scipy'],
    },
    include_package_data=True,
)
