from setuptools import setup

setup(
    name='s3dispatch',
    version='0',
    packages=['s3dispatch'],
    python_requires='>=3.8',
    install_requires=['numpy'],
    extras_require={
        'test': ['pytest'],
    },
    license='',
    author='s3dispatch developers',
    author_email='',
    description='Generic-function dispatch on ordered class tag vectors, with next-method continuation.'
)
