from setuptools import setup

setup(
    name='invokerpc',
    version='0.1.0',
    description='JSON-RPC contract invocation with type-directed parameter decoding',
    author='invokerpc developers',
    package_dir={'invokerpc': 'src/invokerpc'},
    packages=['invokerpc'],
    include_package_data=True,
    python_requires='>=3.8',
    install_requires=[
        'click>=7.0',
        'rich>=10.0',
        'cryptography>=41.0',
        'aiohttp>=3.8',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
            'pytest-asyncio>=0.21',
        ],
    },
    entry_points={
        'console_scripts': [
            'invokerpc = invokerpc.cli:cli'
        ]
    },
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
)
