from setuptools import setup, find_packages
import kaleido


with open('readme.rst') as f:
    long_description = f.read()


setup(
    name='kaleido',
    description="An interactive compiler for a small expression language "
                "implemented in pure Python",
    long_description=long_description,
    version=kaleido.__version__,
    include_package_data=True,
    packages=find_packages(exclude=["*.test.*", "test"]),
    python_requires='>=3.6',
    entry_points={
        'console_scripts': [
            'kaleido = kaleido.cli.kaleido:kaleido',
        ]
    },
    license='BSD',
    classifiers=[
        'License :: OSI Approved :: BSD License',
        'Development Status :: 3 - Alpha',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython',
        'Programming Language :: Python :: Implementation :: PyPy',
        'Topic :: Software Development :: Compilers',
        'Topic :: Software Development :: Interpreters',
    ]
)
