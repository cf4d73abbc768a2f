import setuptools

with open('README.md', 'r') as fh:
    long_description = fh.read()

setuptools.setup(
    name='pngsmith',
    version='0.1.0',
    author='Niv Baehr (BLooperZ)',
    description='Tools for inspecting and editing chunks in PNG files.',
    long_description=long_description,
    long_description_content_type='text/markdown',
    url='https://github.com/blooperz/nutcracker',
    packages=setuptools.find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        'deal',
        'parse',
        'pyyaml',
        'typer',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['pngsmith=pngsmith.runner:app'],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Programming Language :: Python :: 3',
        'Environment :: Console',
        'License :: OSI Approved :: GNU General Public License v3 (GPLv3)',
        'Intended Audience :: Developers',
        'Operating System :: OS Independent',
        'Topic :: Multimedia :: Graphics',
        'Topic :: Utilities'
    ],
    python_requires='>=3.8',
    keywords='png chunk crc encode decode hide message'
)
