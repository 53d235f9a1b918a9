import io
import setuptools

VERSION='1.0.0'

setuptools.setup(name='pyeltorito',
                 version=VERSION,
                 description='Pure python El Torito boot image extractor',
                 long_description=io.open('README.md', encoding='UTF-8').read(),
                 long_description_content_type='text/markdown',
                 author='The pyeltorito developers',
                 license='LGPLv2',
                 classifiers=['Development Status :: 5 - Production/Stable',
                              'Intended Audience :: Developers',
                              'License :: OSI Approved :: GNU Lesser General Public License v2 (LGPLv2)',
                              'Natural Language :: English',
                              'Programming Language :: Python :: 3',
                 ],
                 keywords='iso9660 iso ecma119 eltorito boot',
                 packages=['pyeltorito'],
                 python_requires='>=3.5',
                 extras_require={'test': ['pytest']},
                 scripts=['tools/pyeltorito-extract'],
)
