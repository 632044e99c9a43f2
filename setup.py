from setuptools import find_packages, setup

package_name = 'geo_navigation'

setup(
    name=package_name,
    version='0.1.0',
    packages=find_packages(exclude=['test', 'test.*']),
    package_data={
        package_name: ['config/*.yaml'],
    },
    python_requires='>=3.11',
    install_requires=[
        'setuptools',
        'paho-mqtt>=2.0',
        'pyyaml',
    ],
    zip_safe=True,
    maintainer='hansoo',
    maintainer_email='hansoo@todo.todo',
    description='Location tracking and proximity engine for '
                'location-triggered games',
    license='Apache-2.0',
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'geo_navigation = geo_navigation.presentation.main:main',
        ],
    },
)
