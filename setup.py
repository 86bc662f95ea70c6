from glob import glob
from setuptools import setup


setup(
    name='scicalc',
    use_scm_version={'fallback_version': '0.1.0'},
    description='Scientific calculator engine',
    install_requires=[
        'regex',
        'prompt_toolkit',
    ],
    packages=['scicalc'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.11',
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    setup_requires=[
        'setuptools_scm',
    ],
    tests_require=[
        'pytest',
        'pytest-cov',
        'coverage',
        'flake8',
        'bandit',
        'mypy',
        'safety',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
            'coverage',
            'flake8',
        ],
    },
    scripts=glob('bin/*'),
    license='ISC',
)
