from types import SimpleNamespace

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase

from assessments.errors import Rejection
from assessments.phases import PHASES
from assessments.uploads import (
    MAX_ARTIFACT_NAME_LENGTH, MAX_UPLOAD_BYTES, artifact_name, sniff_content, validate_upload,
)
from .factories import MIB, image_bytes, pdf_upload, png_header, png_upload, xls_upload, xlsx_upload


def declared(content_type, size):
    return SimpleNamespace(content_type=content_type, size=size)


class ValidateUploadTests(SimpleTestCase):
    images = PHASES[3].allowed_types
    sheets = PHASES[4].allowed_types

    def test_size_ceiling_is_inclusive(self):
        self.assertIsNone(validate_upload(declared('image/png', 10_485_760), self.images))
        self.assertEqual(validate_upload(declared('image/png', 10_485_761), self.images), Rejection.TOO_LARGE)
        self.assertEqual(MAX_UPLOAD_BYTES, 10_485_760)

    def test_missing_file(self):
        self.assertEqual(validate_upload(None, self.images), Rejection.MISSING_FILE)

    def test_pdf_rejected_for_both_file_phases(self):
        for allowed in (self.images, self.sheets):
            self.assertEqual(validate_upload(declared('application/pdf', 1024), allowed), Rejection.INVALID_TYPE)

    def test_allowed_types_per_phase(self):
        for content_type in ('image/png', 'image/jpeg', 'image/jpg'):
            self.assertIsNone(validate_upload(declared(content_type, MIB), self.images))
            self.assertEqual(validate_upload(declared(content_type, MIB), self.sheets), Rejection.INVALID_TYPE)
        for content_type in self.sheets:
            self.assertIsNone(validate_upload(declared(content_type, MIB), self.sheets))
            self.assertEqual(validate_upload(declared(content_type, MIB), self.images), Rejection.INVALID_TYPE)

    def test_size_is_reported_before_type(self):
        self.assertEqual(validate_upload(declared('application/pdf', 20 * MIB), self.images), Rejection.TOO_LARGE)


class SniffContentTests(SimpleTestCase):
    def test_real_png_and_jpeg_pass(self):
        self.assertIsNone(sniff_content(png_upload()))
        jpeg = SimpleUploadedFile('photo.jpg', image_bytes('JPEG'), content_type='image/jpeg')
        self.assertIsNone(sniff_content(jpeg))

    def test_image_with_wrong_declared_format_is_rejected(self):
        self.assertEqual(sniff_content(png_upload(content_type='image/jpeg')), Rejection.INVALID_TYPE)

    def test_non_image_bytes_declared_as_png_are_rejected(self):
        fake = SimpleUploadedFile('shot.png', b'not an image at all', content_type='image/png')
        self.assertEqual(sniff_content(fake), Rejection.INVALID_TYPE)

    def test_spreadsheet_signatures(self):
        self.assertIsNone(sniff_content(xlsx_upload()))
        self.assertIsNone(sniff_content(xls_upload()))
        self.assertEqual(sniff_content(xlsx_upload(content_type=PHASES[4].allowed_types[1])), Rejection.INVALID_TYPE)

    def test_oversized_image_dimensions_are_rejected(self):
        bomb = SimpleUploadedFile('shot.png', png_header(60_000, 60_000), content_type='image/png')
        self.assertEqual(sniff_content(bomb), Rejection.INVALID_TYPE)

    def test_unknown_declared_type_is_rejected(self):
        self.assertEqual(sniff_content(pdf_upload()), Rejection.INVALID_TYPE)

    def test_stream_is_rewound(self):
        upload = xlsx_upload()
        sniff_content(upload)
        self.assertEqual(upload.read(4), b'PK\x03\x04')


class ArtifactNameTests(SimpleTestCase):
    def test_unsafe_characters_are_replaced(self):
        self.assertEqual(artifact_name('EX-100', 'my shot (1).png'), 'EX-100_my_shot__1_.png')

    def test_path_traversal_is_neutralised(self):
        name = artifact_name('EX-100', '../../etc/passwd')
        self.assertNotIn('/', name)
        self.assertEqual(name, 'EX-100_.._.._etc_passwd')

    def test_name_is_stable(self):
        self.assertEqual(artifact_name('EX-1', 'résumé.xlsx'), artifact_name('EX-1', 'résumé.xlsx'))
        self.assertEqual(artifact_name('EX-1', 'résumé.xlsx'), 'EX-1_r_sum_.xlsx')

    def test_long_name_is_capped_and_keeps_extension(self):
        name = artifact_name('EX-100', 'a' * 246 + '.png')
        self.assertEqual(len(name), MAX_ARTIFACT_NAME_LENGTH)
        self.assertTrue(name.startswith('EX-100_aaa'))
        self.assertTrue(name.endswith('.png'))
        self.assertEqual(name, artifact_name('EX-100', 'a' * 246 + '.png'))

    def test_long_extension_is_cut_with_the_stem(self):
        name = artifact_name('EX-100', 'shot.' + 'x' * 300)
        self.assertEqual(len(name), MAX_ARTIFACT_NAME_LENGTH)
        self.assertTrue(name.startswith('EX-100_shot.xxx'))
