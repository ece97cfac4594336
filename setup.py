from setuptools import setup
from glob import glob
import os

package_name = 'orb_slam_bridge'

setup(
    name=package_name,
    version='0.1.0',
    packages=[
        package_name,
        package_name + '.nodes',
        package_name + '.core',
        package_name + '.utils',
    ],
    data_files=[
        ('share/ament_index/resource_index/packages',
            ['resource/' + package_name]),
        ('share/' + package_name, ['package.xml']),
        (os.path.join('share', package_name, 'config'), glob('config/*.yaml')),
    ],
    install_requires=['setuptools', 'numpy', 'scipy'],
    extras_require={
        'test': ['pytest'],
    },
    zip_safe=True,
    maintainer='root',
    maintainer_email='root@todo.todo',
    description='Republishes visual SLAM camera poses and keypoints as ROS2 pose, TF and point cloud messages',
    license='Apache-2.0',
    tests_require=['pytest'],
)
