"""Community platform backend: QR attendance and member notifications."""
