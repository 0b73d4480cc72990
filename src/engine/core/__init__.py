"""
どこで: `engine.core` サブパッケージ。
何を: 点列（PointSequence/Rect）・頂点バッファ（Mesh）・2D 変換（Transform）・描画ウィンドウを提供。
なぜ: 生成/ストローク/塗り/バッチの全層が共有する基盤型を一箇所に置くため。
"""
