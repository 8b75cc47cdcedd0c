from setuptools import setup, find_packages
import classlens


with open('readme.rst') as f:
    long_description = f.read()


setup(
    name='classlens',
    description="Java class file inspector and bytecode disassembler implemented in pure Python",
    long_description=long_description,
    version=classlens.__version__,
    include_package_data=True,
    packages=find_packages(exclude=["*.test.*", "test"]),
    install_requires=['pygments'],
    extras_require={'test': ['pytest']},
    entry_points={
        'console_scripts': [
            'classlens-hexdump = classlens.cli.hexdump:hexdump',
            'classlens-java = classlens.cli.java:java',
        ]
    },
    license='BSD',
    classifiers=[
        'License :: OSI Approved :: BSD License',
        'Development Status :: 3 - Alpha',
        'Programming Language :: Java',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython',
        'Programming Language :: Python :: Implementation :: PyPy',
        'Topic :: Software Development :: Disassemblers',
    ]
)
