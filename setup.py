import os
from glob import glob
from setuptools import setup

package_name = 'colorblob'

data_files = [
    (os.path.join('share', package_name, 'config'), glob('config/*.yaml')),
]

setup(
    name=package_name,
    version='0.1.0',
    description='Color blob detection: hue-range thresholding, mask cleanup and contour extraction',
    packages=['colorblob', 'colorblob.detectors', 'scripts'],
    data_files=data_files,
    python_requires='>=3.8',
    install_requires=['numpy', 'opencv-python', 'PyYAML'],
    extras_require={
        'test': ['pytest'],
    },
    zip_safe=True,
    entry_points={
        'console_scripts': [
            'color_blob_viewer = scripts.color_blob_viewer:main',
        ],
    },
)
