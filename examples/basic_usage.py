"""
Basic CaptionKit usage example.

Demonstrates building a caption index from a transcript file and querying it
the way a player does once per frame.
"""

from captionkit import CaptionDisplay, load_caption_index

def main():
    index = load_caption_index("captions/English/intro.txt")
    if index is None:
        print("No transcript found, captions not available")
        return

    print(f"Caption index covers {len(index)} seconds")
    for line_number, message in index.warnings:
        print(f"Skipped line {line_number}: {message}")

    display = CaptionDisplay(index)
    for second in range(10):
        print(f"{second:3d}s  {display.update(second)!r}")

if __name__ == "__main__":
    main()
