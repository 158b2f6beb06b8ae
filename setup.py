import re
from setuptools import setup, find_packages


def extract_version():
    return re.search(
        r'__version__ = "([\d.d\-]+)"',
        open('src/decaylr/__init__.py', 'r', encoding='utf-8').read()).group(1)


if __name__ == '__main__':
    setup(
        name='decaylr',
        version=extract_version(),
        description='learning rate schedules for a machine learning workbench, backed by pytorch optimizers.',
        long_description_content_type='text/markdown',
        include_package_data=True,
        classifiers=[
            'Programming Language :: Python :: 3.8',
            'Programming Language :: Python :: 3.9',
            'Programming Language :: Python :: 3.10',
            'Programming Language :: Python :: 3.11',
        ],
        python_requires='>=3.8',
        package_dir={"": "src"},
        keywords='decaylr',
        packages=find_packages('src'),
        install_requires=[
            'numpy',
            'torch',
            'omegaconf>=2.1',
            'fire',
            'joblib',
        ],
        extras_require={
            'test': [
                'pytest',
            ],
        },
        entry_points={
            'console_scripts': [
                'decaylr = decaylr.cli.cli:main'
            ]
        },
    )
