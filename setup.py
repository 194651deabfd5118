#!/usr/bin/env python
from setuptools import setup
import os


def get_version():
    curdir = os.path.dirname(__file__)
    filename = os.path.join(curdir, 'src', 'svg2img', 'version.py')
    with open(filename, 'rb') as fp:
        return fp.read().decode('utf8').split('=')[1].strip(" \n'")


def readme():
    with open('README.rst') as f:
        return f.read()


setup(
    name='svg2img',
    version=get_version(),
    description='Convert SVG to PNG or JPEG image',
    long_description=readme(),
    classifiers=[
        'Development Status :: 3 - Alpha',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Multimedia :: Graphics',
        'Topic :: Multimedia :: Graphics :: Graphics Conversion',
    ],
    keywords='svg png jpeg rasterize resvg',
    license='MIT License',
    package_dir={'': 'src'},
    packages=[
        'svg2img',
        'svg2img.rasterizer',
    ],
    python_requires='>=3.10',
    install_requires=[
        'pillow',
        'resvg-py',
        'httpx',
    ],
    extras_require={
        'test': [
            'pytest'],
    },
    include_package_data=True,
    entry_points={
        'console_scripts': ['svg2img=svg2img.__main__:main']
    },
)
