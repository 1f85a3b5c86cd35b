import re
from pathlib import Path

from setuptools import setup, find_packages

# Read the version without importing the package, its dependencies may not be installed yet
version = re.search(r'^__version__ = "([^"]+)"',
                    Path(__file__).parent.joinpath("apkbuild", "__init__.py").read_text(),
                    re.MULTILINE).group(1)

setup(
    name='apkbuild',
    version=version,
    author='apkbuild contributors',
    description='Android application build orchestrator',
    long_description='Task runner wiring the Android SDK tools into a dependency ordered build pipeline',
    long_description_content_type="text/x-rst",
    url='https://github.com/apkbuild/apkbuild',
    packages=find_packages(include=['apkbuild', 'apkbuild.*']),
    entry_points= {
        'console_scripts': ['apkbuild=apkbuild:apkbuild']},
    license='MIT License',
    python_requires=">=3.8",
    install_requires=[
        'click >= 8.0',
        'rich >= 12.0',
        'yaenv == 1.2.2',
        'PyYAML >= 5.4',
    ],
    extras_require={
        'test': ['pytest >= 7.0'],
    },
    keywords=['ANDROID', 'BUILD', 'APK'],
    classifiers=[
         'Development Status :: 3 - Alpha',
         'Intended Audience :: Developers',
         'Topic :: Software Development :: Build Tools',
         'License :: OSI Approved :: MIT License',
         'Programming Language :: Python :: 3',
         'Programming Language :: Python :: 3.8',
         'Programming Language :: Python :: 3.9',
         'Programming Language :: Python :: 3.10',
    ],
)
