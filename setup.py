from setuptools import setup, find_packages
import os
from glob import glob

package_name = 'dock_nav'

setup(
    name=package_name,
    version='1.0.0',
    packages=find_packages(exclude=['test', 'test.*']),
    data_files=[
        # Config files
        (os.path.join('share', package_name, 'config'),
            glob('config/*.yaml')),
    ],
    install_requires=[
        'setuptools',
        'PyYAML',
    ],
    extras_require={
        'test': ['pytest', 'numpy'],
    },
    python_requires='>=3.8',
    zip_safe=True,
    maintainer='Your Name',
    maintainer_email='your.email@example.com',
    description='Vision-guided docking route planning and motion profile execution',
    license='MIT',
    tests_require=['pytest'],
    entry_points={
        'console_scripts': [
            'dock_nav_sim = dock_nav.nodes.sim_node:main',
        ],
    },
)
