from setuptools import setup, find_packages

setup(
    name='clockiReport',
    version='0.3.0',
    description='A CLI tool for printing Clockify time entries as tables, CSV, JSON, Markdown or custom templates.',
    author='René Lachmann',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=[
        'requests',
        'tabulate>=0.9',
        'python-dotenv',
        'jinja2>=3.0',
        'rich>=10.2',
        'python-dateutil>=2.8',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'clockireport=clockireport.__main__:main',
        ],
    },
    include_package_data=True,
    package_data={
        'clockireport.reports': ['resources/*.j2'],
    },
    python_requires='>=3.8',
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
    ],
)
