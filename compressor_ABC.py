from abc import ABC, abstractmethod
from typing import BinaryIO, Iterable, Tuple


class Compressor(ABC):
    """
    Interface describing compression and decompression of byte
    sequences, streams and files with a particular algorithm.
    """

    @abstractmethod
    def compress(self, src: Iterable[int], output: bytearray) -> None:
        """
        Compresses the bytes of src and appends the result to output.

        Args:
            src: Bytes to compress
            output: Growable buffer receiving the compressed bytes
        """
        pass

    @abstractmethod
    def decompress(self, data: bytes) -> bytes:
        """
        Decompresses a buffer produced by compress().

        Args:
            data: Compressed bytes

        Returns:
            Decompressed bytes
        """
        pass

    @staticmethod
    def _report(action: str, size_in: int, size_out: int) -> str:
        ratio = size_in / size_out if size_out else 0.0
        return f"{action}: {size_in} bytes -> {size_out} bytes (ratio {ratio:.2f}x)"

    def compress_bytes(self, data: bytes) -> Tuple[bytes, str]:
        """
        Helper for compressing bytes.

        Args:
            data: Input data to compress

        Returns:
            Tuple (compressed data, compression info)
        """
        output = bytearray()
        self.compress(data, output)
        return bytes(output), self._report("Compressed", len(data), len(output))

    def decompress_bytes(self, data: bytes) -> Tuple[bytes, str]:
        """
        Helper for decompressing bytes.

        Args:
            data: Compressed data

        Returns:
            Tuple (decompressed data, decompression info)
        """
        result = self.decompress(data)
        return result, self._report("Decompressed", len(data), len(result))

    def compress_stream(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Reads the whole input stream, compresses it and writes
        the result to the output stream.

        Returns:
            String with information for logging
        """
        compressed, log_info = self.compress_bytes(input_stream.read())
        output_stream.write(compressed)
        return log_info

    def decompress_stream(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Reads the whole compressed stream, decompresses it and writes
        the result to the output stream.

        Returns:
            String with information for logging
        """
        decompressed, log_info = self.decompress_bytes(input_stream.read())
        output_stream.write(decompressed)
        return log_info

    def compress_file(self, input_file: str, output_file: str, verbose: bool = False) -> str:
        """
        Helper for compressing a file.

        Args:
            input_file: Path to the input file
            output_file: Path to the output file
            verbose: Print the compression info

        Returns:
            Compression info
        """
        with open(input_file, "rb") as in_file, open(output_file, "wb") as out_file:
            log_info = self.compress_stream(in_file, out_file)
        if verbose:
            print(f"{input_file} -> {output_file}")
            print(log_info)
        return log_info

    def decompress_file(self, input_file: str, output_file: str, verbose: bool = False) -> str:
        """
        Helper for decompressing a file.

        Args:
            input_file: Path to the compressed file
            output_file: Path to the output file
            verbose: Print the decompression info

        Returns:
            Decompression info
        """
        with open(input_file, "rb") as in_file, open(output_file, "wb") as out_file:
            log_info = self.decompress_stream(in_file, out_file)
        if verbose:
            print(f"{input_file} -> {output_file}")
            print(log_info)
        return log_info
