"""Shared constants and helpers for Bendahara."""

from typing import Optional

DEFAULT_CATEGORY = "umum"
TOP_LIMIT = 3

MENU_ROWS = [
    ["Export", "Reset"],
    ["Lapor", "Saldo", "Top 3"],
]

ONBOARDING_TEXT = "👋 Hai! Saya bot pencatatan keuangan.\nKetik /start untuk memulai 💰"
ASK_NAME_TEXT = "Namamu panggilanmu apa?"
NAME_UNREADABLE_TEXT = "Namanya belum kebaca, coba ketik lagi ya 🙂"
NAME_PENDING_TEXT = "Sebutkan nama panggilanmu dulu ya 🙂"

RESET_PROMPT_TEXT = (
    "⚠️ Ini akan menghapus SEMUA transaksi milikmu.\n"
    "Ketik `ya` untuk konfirmasi, atau `batal` jika tidak jadi."
)
RESET_ALL_PROMPT_TEXT = (
    "⚠️ Ini akan menghapus *semua data* dari seluruh pengguna.\n"
    "Ketik `ya` untuk melanjutkan, atau `batal` jika tidak jadi."
)
CONFIRM_PENDING_TEXT = "Masih menunggu konfirmasi. Ketik `ya` untuk lanjut atau `batal` untuk membatalkan."
RESET_CANCELLED_TEXT = "❎ Reset dibatalkan."
ADMIN_ONLY_TEXT = "❌ Khusus admin."

NO_DATA_TEXT = "Belum ada data."
NO_DATA_MONTH_TEXT = "Belum ada data bulan ini."
EXPORT_CAPTION = "📄 Transaksi bulan ini"
EXPORT_FAILED_TEXT = "❌ Export gagal dikirim. Coba lagi ya."
STORE_FAILED_TEXT = "⚠️ Maaf, terjadi kesalahan. Coba lagi nanti."

OUT_USAGE = "Format: out <nominal> <keterangan>"
IN_USAGE = "Format: in <nominal> <kategori/ket>"
CATAT_USAGE = 'Format: catat <nominal> [kategori] [#metode] ["catatan"]'

HELP_TEXT = (
    "Perintah:\n"
    "• catat 32000 makan #bca \"ayam geprek\"\n"
    "• out 15000 kopi\n"
    "• in 150000 gaji\n"
    "• lapor\n"
    "• saldo\n"
    "• top 3\n"
    "• export (CSV bulan ini)\n"
    "• reset  (hapus semua transaksi milikmu)"
)


def rupiah(amount: int) -> str:
    """Format an integer amount with id-ID thousands separators."""
    return f"{amount:,}".replace(",", ".")


def greet_text(name: Optional[str]) -> str:
    who = name or "teman"
    return (
        f"Halo, {who}! Saya selaku bendahara kamu siap melakukan pencatatan keuanganmu.\n\n"
        "Perintah:\n"
        "• out (nominal) (nama pengeluaran)\n"
        "--> contoh: out 15000 kopi\n"
        "\n"
        "• in (nominal) (sumber pemasukan)\n"
        "--> contoh: in 500000 gaji\n"
        "\n"
        "• catat (nominal) [kategori] [#metode] [\"catatan\"]\n"
        "• lapor (laporan keuangan hari ini)\n"
        "• saldo\n"
        "• top 3\n"
        "• export (CSV bulan ini)\n"
        "• reset  (hapus semua transaksi milikmu)"
    )
