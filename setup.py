from setuptools import setup, find_packages

setup(
    name='abnf-regex',
    version='0.1.0',
    author='abnf-regex contributors',
    project_urls={
        'RFC 5234': 'https://www.rfc-editor.org/rfc/rfc5234',
    },
    packages=find_packages('src'),
    package_dir={'': 'src'},
    include_package_data=True,
    license='MIT',
    description='Compile ABNF (RFC 5234) grammars into regular expressions.',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    python_requires='>=3.8',
    install_requires=[
        'pydantic>=2',
        'typing_extensions',
    ],
    extras_require={
        'test': [
            'pytest',
            'abnf>=2',
            'python-dateutil',
        ],
    },
)
