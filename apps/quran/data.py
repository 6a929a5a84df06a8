"""
Static Quran reference tables.

These seed the ``juz`` and ``surah`` tables and act as the offline fallback
when a live row is missing.
"""

# (surah_number, name, total_ayat)
SURAHS = [
    (1, "Al-Fatihah", 7),
    (2, "Al-Baqarah", 286),
    (3, "Aal-Imran", 200),
    (4, "An-Nisa", 176),
    (5, "Al-Ma'idah", 120),
    (6, "Al-An'am", 165),
    (7, "Al-A'raf", 206),
    (8, "Al-Anfal", 75),
    (9, "At-Tawbah", 129),
    (10, "Yunus", 109),
    (11, "Hud", 123),
    (12, "Yusuf", 111),
    (13, "Ar-Ra'd", 43),
    (14, "Ibrahim", 52),
    (15, "Al-Hijr", 99),
    (16, "An-Nahl", 128),
    (17, "Al-Isra", 111),
    (18, "Al-Kahf", 110),
    (19, "Maryam", 98),
    (20, "Ta-Ha", 135),
    (21, "Al-Anbiya", 112),
    (22, "Al-Hajj", 78),
    (23, "Al-Mu'minun", 118),
    (24, "An-Nur", 64),
    (25, "Al-Furqan", 77),
    (26, "Ash-Shu'ara", 227),
    (27, "An-Naml", 93),
    (28, "Al-Qasas", 88),
    (29, "Al-Ankabut", 69),
    (30, "Ar-Rum", 60),
    (31, "Luqman", 34),
    (32, "As-Sajdah", 30),
    (33, "Al-Ahzab", 73),
    (34, "Saba", 54),
    (35, "Fatir", 45),
    (36, "Ya-Sin", 83),
    (37, "As-Saffat", 182),
    (38, "Sad", 88),
    (39, "Az-Zumar", 75),
    (40, "Ghafir", 85),
    (41, "Fussilat", 54),
    (42, "Ash-Shura", 53),
    (43, "Az-Zukhruf", 89),
    (44, "Ad-Dukhan", 59),
    (45, "Al-Jathiyah", 37),
    (46, "Al-Ahqaf", 35),
    (47, "Muhammad", 38),
    (48, "Al-Fath", 29),
    (49, "Al-Hujurat", 18),
    (50, "Qaf", 45),
    (51, "Adh-Dhariyat", 60),
    (52, "At-Tur", 49),
    (53, "An-Najm", 62),
    (54, "Al-Qamar", 55),
    (55, "Ar-Rahman", 78),
    (56, "Al-Waqi'ah", 96),
    (57, "Al-Hadid", 29),
    (58, "Al-Mujadilah", 22),
    (59, "Al-Hashr", 24),
    (60, "Al-Mumtahanah", 13),
    (61, "As-Saff", 14),
    (62, "Al-Jumu'ah", 11),
    (63, "Al-Munafiqun", 11),
    (64, "At-Taghabun", 18),
    (65, "At-Talaq", 12),
    (66, "At-Tahrim", 12),
    (67, "Al-Mulk", 30),
    (68, "Al-Qalam", 52),
    (69, "Al-Haqqah", 52),
    (70, "Al-Ma'arij", 44),
    (71, "Nuh", 28),
    (72, "Al-Jinn", 28),
    (73, "Al-Muzzammil", 20),
    (74, "Al-Muddathir", 56),
    (75, "Al-Qiyamah", 40),
    (76, "Al-Insan", 31),
    (77, "Al-Mursalat", 50),
    (78, "An-Naba", 40),
    (79, "An-Nazi'at", 46),
    (80, "Abasa", 42),
    (81, "At-Takwir", 29),
    (82, "Al-Infitar", 19),
    (83, "Al-Mutaffifin", 36),
    (84, "Al-Inshiqaq", 25),
    (85, "Al-Buruj", 22),
    (86, "At-Tariq", 17),
    (87, "Al-A'la", 19),
    (88, "Al-Ghashiyah", 26),
    (89, "Al-Fajr", 30),
    (90, "Al-Balad", 20),
    (91, "Ash-Shams", 15),
    (92, "Al-Layl", 21),
    (93, "Ad-Duha", 11),
    (94, "Ash-Sharh", 8),
    (95, "At-Tin", 8),
    (96, "Al-Alaq", 19),
    (97, "Al-Qadr", 5),
    (98, "Al-Bayyinah", 8),
    (99, "Az-Zalzalah", 8),
    (100, "Al-Adiyat", 11),
    (101, "Al-Qari'ah", 11),
    (102, "At-Takathur", 8),
    (103, "Al-Asr", 3),
    (104, "Al-Humazah", 9),
    (105, "Al-Fil", 5),
    (106, "Quraysh", 4),
    (107, "Al-Ma'un", 7),
    (108, "Al-Kawthar", 3),
    (109, "Al-Kafirun", 6),
    (110, "An-Nasr", 3),
    (111, "Al-Masad", 5),
    (112, "Al-Ikhlas", 4),
    (113, "Al-Falaq", 5),
    (114, "An-Nas", 6),
]

SURAH_AYAH_COUNTS = {number: total for number, _, total in SURAHS}

# juz_number -> surah_list, in the same compact grammar the juz table uses
JUZ_SURAH_LISTS = {
    1: "1-2",
    2: "2",
    3: "2-3",
    4: "3-4",
    5: "4",
    6: "4-5",
    7: "5-6",
    8: "6-7",
    9: "7-8",
    10: "8-9",
    11: "9-11",
    12: "11-12",
    13: "12-14",
    14: "15-16",
    15: "17-18",
    16: "18-20",
    17: "21-22",
    18: "23-25",
    19: "25-27",
    20: "27-29",
    21: "29-33",
    22: "33-36",
    23: "36-39",
    24: "39-41",
    25: "41-45",
    26: "46-51",
    27: "51-57",
    28: "58-66",
    29: "67-77",
    30: "78-114",
}

# juz_number -> (surah, ayah) of the first verse of that juz
JUZ_STARTS = {
    1: (1, 1),
    2: (2, 142),
    3: (2, 253),
    4: (3, 93),
    5: (4, 24),
    6: (4, 148),
    7: (5, 82),
    8: (6, 111),
    9: (7, 88),
    10: (8, 41),
    11: (9, 93),
    12: (11, 6),
    13: (12, 53),
    14: (15, 1),
    15: (17, 1),
    16: (18, 75),
    17: (21, 1),
    18: (23, 1),
    19: (25, 21),
    20: (27, 56),
    21: (29, 46),
    22: (33, 31),
    23: (36, 28),
    24: (39, 32),
    25: (41, 47),
    26: (46, 1),
    27: (51, 31),
    28: (58, 1),
    29: (67, 1),
    30: (78, 1),
}
